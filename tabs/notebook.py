"""Notebook panel renderer."""

from __future__ import annotations

from typing import Callable, Sequence

import streamlit as st

from models import Note
from ui_components import format_timestamp
from utils_streamlit import trigger_rerun
from validators import is_valid_note


def render_tab(
    notes: Sequence[Note],
    *,
    on_add: Callable[[str, str], bool],
    on_delete: Callable[[str], bool],
) -> None:
    st.subheader(f"📖 じぶんのノート ({len(notes)}こ)")

    with st.expander("メモをかく", expanded=False):
        with st.form("add_note_form", clear_on_submit=True):
            title = st.text_input("タイトル", placeholder="タイトル（なにをしらべた？）")
            content = st.text_area("メモ", placeholder="わかったこと、おもったこと...", height=140)
            submitted = st.form_submit_button("ほぞんする")
            if submitted and is_valid_note(title, content):
                if on_add(title, content):
                    trigger_rerun()

    if not notes:
        st.caption("まだメモがないよ。わかったことをメモしていこう！")
        return

    for note in notes:
        with st.container(border=True):
            header, action = st.columns([5, 1])
            header.markdown(f"**{note.title}**")
            if action.button("🗑", key=f"delete_note_{note.id}", help="このメモをけす"):
                on_delete(note.id)
                trigger_rerun()
            st.text(note.content)
            st.caption(f"🕒 {format_timestamp(note.created_at)}")

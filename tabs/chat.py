"""Chat tab renderer."""

from __future__ import annotations

from typing import Sequence

import streamlit as st

from models import Message, Role
from ui_components import render_citation_links

_AVATARS = {
    Role.ASSISTANT: "🤖",
    Role.USER: "🧒",
}


def render_tab(chat_history: Sequence[Message] | None) -> None:
    """Render the transcript oldest first, with citations under assistant turns."""

    for message in chat_history or []:
        with st.chat_message(message.role.value, avatar=_AVATARS.get(message.role)):
            # st.text keeps typed newlines verbatim.
            st.text(message.content)
            if message.role is Role.ASSISTANT:
                render_citation_links(message.sources)

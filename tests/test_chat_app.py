from dataclasses import replace

import streamlit as st

import chat_app
from project_store import ProjectStore
from services.conversation_service import CycleOutcome
from services.prompt_service import RESET_GREETING_TEXT


def _prepare(monkeypatch, tmp_path, *, api_key=None) -> None:
    st.session_state.clear()
    settings = replace(chat_app.SETTINGS, data_dir=str(tmp_path), genai_api_key=api_key)
    monkeypatch.setattr(chat_app, "SETTINGS", settings)


def test_session_bootstrap_without_api_key(monkeypatch, tmp_path):
    _prepare(monkeypatch, tmp_path)

    chat_app._ensure_session_state()

    assert st.session_state.orchestrator is None
    assert len(st.session_state.project_session.project.chat_history) == 1
    assert st.session_state[chat_app.RESET_CONFIRM_KEY] is False
    assert chat_app._handle_prompt("こんにちは") is CycleOutcome.REJECTED


def test_notes_persist_and_reset_survives_reload(monkeypatch, tmp_path):
    _prepare(monkeypatch, tmp_path)
    chat_app._ensure_session_state()

    assert chat_app._add_note("かんさつ", "よるにうごく") is True
    assert chat_app._add_note("", "よるにうごく") is False
    store_path = st.session_state.project_session._store.path
    assert store_path.exists()

    chat_app._reset_project()

    assert st.session_state.project_session.project.notes == ()
    reloaded = ProjectStore(tmp_path).load()
    assert reloaded is not None
    assert reloaded.notes == ()
    assert [message.content for message in reloaded.chat_history] == [RESET_GREETING_TEXT]


def test_reloaded_session_restores_saved_notes(monkeypatch, tmp_path):
    _prepare(monkeypatch, tmp_path)
    chat_app._ensure_session_state()
    chat_app._add_note("かんさつ", "よるにうごく")

    st.session_state.clear()
    chat_app._ensure_session_state()

    assert [note.title for note in st.session_state.project_session.project.notes] == ["かんさつ"]

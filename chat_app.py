"""Streamlit entry point for the Mirai inquiry lab."""

from __future__ import annotations

import logging

import streamlit as st

from app_settings import load_settings
from diagnostics import DiagnosticLog
from project_store import ProjectStore
from services.conversation_service import ConversationOrchestrator, CycleOutcome
from services.gemini_gateway import GeminiGateway
from services.notebook_service import ProjectSession
from tabs import chat as chat_tab, notebook as notebook_tab
from ui_components import render_diagnostics
from utils_streamlit import request_confirmation, resolve_confirmation, trigger_rerun

SETTINGS = load_settings()
LOGGER = logging.getLogger(__name__)

RESET_CONFIRM_KEY = "confirm_reset"
PAGE_CSS = """
<style>
.main-title {font-size:2rem !important;font-weight:800 !important;color:#1e3a8a;margin-bottom:0;}
.sub-title {font-size:0.8rem;font-weight:700;color:#60a5fa;letter-spacing:0.2em;text-transform:uppercase;}
.source-links {display:flex;flex-wrap:wrap;gap:0.5rem;}
.source-link {background:#eff6ff;color:#2563eb;padding:0.25rem 0.75rem;border-radius:0.75rem;font-size:0.8rem;font-weight:700;text-decoration:none;}
</style>
"""


def _configure_logging() -> None:
    logging.basicConfig(
        level=SETTINGS.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_gateway() -> GeminiGateway | None:
    if not SETTINGS.genai_api_key:
        LOGGER.warning("API_KEY is not configured; chat is disabled.")
        return None
    return GeminiGateway(
        SETTINGS.genai_api_key,
        model=SETTINGS.model_name,
        enable_search=SETTINGS.enable_search_grounding,
    )


def _ensure_session_state() -> None:
    if "diagnostics" not in st.session_state:
        st.session_state.diagnostics = DiagnosticLog()
    diagnostics = st.session_state.diagnostics
    if "project_session" not in st.session_state:
        store = ProjectStore(SETTINGS.data_dir, SETTINGS.storage_key, diagnostics=diagnostics)
        st.session_state.project_session = ProjectSession.open(store, diagnostics=diagnostics)
    if "orchestrator" not in st.session_state:
        gateway = _build_gateway()
        st.session_state.orchestrator = (
            ConversationOrchestrator(st.session_state.project_session, gateway, diagnostics=diagnostics)
            if gateway is not None
            else None
        )
    if RESET_CONFIRM_KEY not in st.session_state:
        st.session_state[RESET_CONFIRM_KEY] = False


def _reset_project() -> None:
    st.session_state.project_session.reset()


def _add_note(title: str, content: str) -> bool:
    return st.session_state.project_session.add_note(title, content)


def _delete_note(note_id: str) -> bool:
    return st.session_state.project_session.delete_note(note_id)


def _handle_prompt(prompt: str) -> CycleOutcome:
    orchestrator: ConversationOrchestrator | None = st.session_state.orchestrator
    if orchestrator is None:
        return CycleOutcome.REJECTED
    # The script run blocks until the cycle ends, so the spinner is the only in-flight cue.
    with st.spinner("ミライが一生けんめい考え中..."):
        return orchestrator.send(prompt)


def _render_reset_controls() -> None:
    sidebar = st.sidebar
    if not st.session_state[RESET_CONFIRM_KEY]:
        if sidebar.button("🗑 さいしょからやりなおす", key="reset_button"):
            request_confirmation(st.session_state, RESET_CONFIRM_KEY)
            trigger_rerun()
        return

    sidebar.warning("これまでのしらべ学習のきろくをけして、新しく始める？")
    confirm_col, cancel_col = sidebar.columns(2)
    confirmed = confirm_col.button("けす", key="reset_confirm", type="primary")
    cancelled = cancel_col.button("やめる", key="reset_cancel")
    if confirmed or cancelled:
        resolve_confirmation(
            st.session_state,
            RESET_CONFIRM_KEY,
            confirmed=confirmed,
            action=_reset_project,
        )
        trigger_rerun()


def _render_app() -> None:
    st.set_page_config(page_title="ミライ探究ラボ", page_icon="💡", layout="wide")
    _ensure_session_state()

    session: ProjectSession = st.session_state.project_session
    orchestrator: ConversationOrchestrator | None = st.session_state.orchestrator

    st.markdown(PAGE_CSS, unsafe_allow_html=True)
    st.markdown("<h1 class='main-title'>💡 ミライ探究ラボ</h1>", unsafe_allow_html=True)
    st.markdown("<p class='sub-title'>Inquiry Based Learning Companion</p>", unsafe_allow_html=True)

    _render_reset_controls()
    with st.sidebar.expander("診断ログ"):
        render_diagnostics(st.session_state.diagnostics.events())

    chat_col, notebook_col = st.columns([3, 2])
    with chat_col:
        chat_tab.render_tab(session.project.chat_history)
        if orchestrator is None:
            st.info("ミライとお話しするには API_KEY の設定が必要です。")
        st.caption("ℹ️ ミライもしっぱいすることがあるから、図鑑や本でもたしかめてみてね！")
    with notebook_col:
        notebook_tab.render_tab(
            session.project.notes,
            on_add=_add_note,
            on_delete=_delete_note,
        )

    prompt = st.chat_input(
        "ミライにききたいことを書いてね（しらべかた、ヒントなど）",
        key="chat_prompt",
        disabled=orchestrator is None,
    )
    if prompt:
        outcome = _handle_prompt(prompt)
        LOGGER.debug("Prompt handled: %s", outcome.value)
        trigger_rerun()


def main() -> None:
    """Streamlit entry point for the research companion."""

    _configure_logging()
    _render_app()


if __name__ == "__main__":
    main()

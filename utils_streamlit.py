"""Streamlit helpers shared by the chat and notebook panels."""

from __future__ import annotations

from typing import Any, Callable, MutableMapping

import streamlit as st


def trigger_rerun(*, st_module=st) -> None:
    """Ask Streamlit to rerun the script using whichever API is available."""

    rerun = getattr(st_module, "rerun", None) or getattr(st_module, "experimental_rerun", None)
    if rerun is not None:
        rerun()


def request_confirmation(session_state: MutableMapping[str, Any], key: str) -> None:
    """Flag an action as waiting for the user's confirmation."""

    session_state[key] = True


def resolve_confirmation(
    session_state: MutableMapping[str, Any],
    key: str,
    *,
    confirmed: bool,
    action: Callable[[], Any],
) -> bool:
    """Run ``action`` only if a pending confirmation was accepted.

    The pending flag is cleared either way. Returns ``True`` when the action ran.
    """

    pending = bool(session_state.get(key))
    session_state[key] = False
    if pending and confirmed:
        action()
        return True
    return False


__all__ = ["request_confirmation", "resolve_confirmation", "trigger_rerun"]

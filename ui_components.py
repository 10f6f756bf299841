"""Reusable Streamlit UI primitives."""

from __future__ import annotations

import html
from datetime import datetime
from typing import Iterable, Sequence

import streamlit as st

from diagnostics import DiagnosticEvent
from models import Citation, PlaceCitation, WebCitation

WEB_FALLBACK_LABEL = "ページをみる"
PLACE_FALLBACK_LABEL = "地図をみる"


def citation_links(sources: Iterable[Citation] | None) -> list[tuple[str, str, str]]:
    """Normalize citations to ``(icon, label, uri)`` rows."""

    rows: list[tuple[str, str, str]] = []
    for source in sources or []:
        if isinstance(source, WebCitation):
            rows.append(("🔗", source.title or WEB_FALLBACK_LABEL, source.uri))
        elif isinstance(source, PlaceCitation):
            rows.append(("📍", source.title or PLACE_FALLBACK_LABEL, source.uri))
    return rows


def format_timestamp(epoch_ms: int) -> str:
    """Render a millisecond timestamp in the server's local time."""

    return datetime.fromtimestamp(epoch_ms / 1000).strftime("%Y/%m/%d %H:%M")


def render_citation_links(sources: Sequence[Citation] | None, *, st_module=st) -> None:
    """Render the "pages we looked at" footer under an assistant reply."""

    rows = citation_links(sources)
    if not rows:
        return
    links = " ".join(
        f"<a class='source-link' href='{html.escape(uri, quote=True)}' target='_blank' "
        f"rel='noopener noreferrer'>{icon} {html.escape(label)}</a>"
        for icon, label, uri in rows
    )
    st_module.caption("🔍 しらべたページ:")
    st_module.markdown(f"<div class='source-links'>{links}</div>", unsafe_allow_html=True)


def render_diagnostics(events: Sequence[DiagnosticEvent], *, limit: int = 20, st_module=st) -> None:
    """Render the most recent diagnostic events, newest first."""

    recent = list(events)[-limit:]
    if not recent:
        st_module.caption("No diagnostic events.")
        return
    for event in reversed(recent):
        st_module.caption(f"**{event.level}** {event.event}")
        if event.detail:
            st_module.json(dict(event.detail), expanded=False)

"""Tests for :mod:`ui_components`."""

from __future__ import annotations

from diagnostics import DiagnosticLog
from models import PlaceCitation, WebCitation
from ui_components import PLACE_FALLBACK_LABEL, WEB_FALLBACK_LABEL, citation_links, render_diagnostics


class RecordingStreamlit:
    def __init__(self) -> None:
        self.captions: list[str] = []
        self.payloads: list[dict] = []

    def caption(self, text):
        self.captions.append(text)

    def json(self, payload, expanded=False):
        self.payloads.append(payload)


def test_citation_links_use_fallback_labels():
    rows = citation_links(
        [
            WebCitation(uri="https://a", title="図鑑"),
            WebCitation(uri="https://b"),
            PlaceCitation(uri="https://m"),
        ]
    )
    assert rows == [
        ("🔗", "図鑑", "https://a"),
        ("🔗", WEB_FALLBACK_LABEL, "https://b"),
        ("📍", PLACE_FALLBACK_LABEL, "https://m"),
    ]


def test_citation_links_handles_missing_sources():
    assert citation_links(None) == []


def test_render_diagnostics_lists_newest_first():
    log = DiagnosticLog()
    log.record("INFO", "project.reset")
    log.record("ERROR", "gateway.failed", error="boom")
    fake = RecordingStreamlit()

    render_diagnostics(log.events(), st_module=fake)

    assert fake.captions == ["**ERROR** gateway.failed", "**INFO** project.reset"]
    assert fake.payloads == [{"error": "boom"}]

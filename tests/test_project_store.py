"""Tests for :mod:`project_store`."""

from __future__ import annotations

import json

import pytest

from diagnostics import DiagnosticLog
from models import Message, PlaceCitation, Role, WebCitation
from project_store import STORAGE_KEY, ProjectStore
from services.notebook_service import add_note, append_message, reset_project


def test_load_missing_document_returns_none(tmp_path):
    diagnostics = DiagnosticLog()
    store = ProjectStore(tmp_path, diagnostics=diagnostics)
    assert store.load() is None
    assert diagnostics.events() == []


def test_save_then_load_round_trip(tmp_path):
    project = add_note(reset_project(), "発見", "ツノは\nオスだけ")
    project = append_message(
        project,
        Message(
            id="a1",
            role=Role.ASSISTANT,
            content="すごい発見だね！",
            timestamp=42,
            sources=(WebCitation(uri="https://example.com", title="図鑑"), PlaceCitation(uri="https://maps.example")),
        ),
    )
    store = ProjectStore(tmp_path)

    assert store.save(project) is True
    assert store.path.name == f"{STORAGE_KEY}.json"
    assert store.load() == project


def test_corrupt_document_loads_as_none(tmp_path):
    diagnostics = DiagnosticLog()
    store = ProjectStore(tmp_path, diagnostics=diagnostics)
    store.path.write_text("{not json", encoding="utf-8")

    assert store.load() is None
    assert diagnostics.events("persistence.load_failed")


def test_wrong_shape_loads_as_none(tmp_path):
    diagnostics = DiagnosticLog()
    store = ProjectStore(tmp_path, diagnostics=diagnostics)
    store.path.write_text(json.dumps(["not", "a", "project"]), encoding="utf-8")
    assert store.load() is None

    store.path.write_text(json.dumps({"id": "default", "notes": []}), encoding="utf-8")
    assert store.load() is None
    assert len(diagnostics.events("persistence.load_failed")) == 2


def _document(*, message_timestamp="1", note_created_at="1") -> str:
    return (
        '{"id": "default", "goal": "", "questions": [],'
        f' "notes": [{{"id": "n1", "title": "t", "content": "c", "createdAt": {note_created_at}}}],'
        f' "chatHistory": [{{"id": "m1", "role": "user", "content": "x", "timestamp": {message_timestamp}}}]}}'
    )


@pytest.mark.parametrize(
    "raw",
    [
        _document(message_timestamp="1e400"),
        _document(note_created_at="1e400"),
        _document(message_timestamp="-1e400"),
        _document(message_timestamp="NaN"),
        _document(note_created_at="Infinity"),
        _document(message_timestamp='"yesterday"'),
        _document(note_created_at="null"),
        "[" * 200000 + "]" * 200000,
        '{"id": "default", "goal": "", "questions": [1], "notes": [], "chatHistory": []}',
    ],
    ids=[
        "overflowing-message-timestamp",
        "overflowing-note-created-at",
        "negative-overflow",
        "nan-timestamp",
        "infinite-created-at",
        "string-timestamp",
        "null-created-at",
        "deeply-nested",
        "non-string-question",
    ],
)
def test_corrupt_values_load_as_none_and_are_recorded(tmp_path, raw):
    diagnostics = DiagnosticLog()
    store = ProjectStore(tmp_path, diagnostics=diagnostics)
    store.path.write_text(raw, encoding="utf-8")

    assert store.load() is None
    assert diagnostics.events("persistence.load_failed")


def test_well_formed_document_helper_loads(tmp_path):
    store = ProjectStore(tmp_path)
    store.path.write_text(_document(), encoding="utf-8")

    project = store.load()

    assert project is not None
    assert project.notes[0].created_at == 1
    assert project.chat_history[0].timestamp == 1


def test_save_failure_is_reported_not_raised(tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("a file where a directory should be", encoding="utf-8")
    diagnostics = DiagnosticLog()
    store = ProjectStore(blocker, diagnostics=diagnostics)

    assert store.save(reset_project()) is False
    assert diagnostics.events("persistence.save_failed")


def test_clear_removes_document(tmp_path):
    store = ProjectStore(tmp_path)
    store.save(reset_project())
    store.clear()
    assert not store.path.exists()
    store.clear()
    assert store.load() is None

"""State transitions for the research project and the session that owns it."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING

from diagnostics import DiagnosticLog
from models import Message, Note, Project, Role
from services.prompt_service import GREETING_TEXT, RESET_GREETING_TEXT
from validators import is_valid_note

if TYPE_CHECKING:
    from project_store import ProjectStore


logger = logging.getLogger(__name__)

DEFAULT_PROJECT_ID = "default"


def new_identifier() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


def append_message(project: Project, message: Message) -> Project:
    """Return ``project`` with ``message`` at the end of the transcript."""

    return replace(project, chat_history=project.chat_history + (message,))


def add_note(project: Project, title: str, content: str, *, now: int | None = None) -> Project:
    """Prepend a new note; blank title or content leaves ``project`` untouched."""

    if not is_valid_note(title, content):
        return project
    note = Note(
        id=new_identifier(),
        title=title,
        content=content,
        created_at=now_ms() if now is None else now,
    )
    return replace(project, notes=(note,) + project.notes)


def delete_note(project: Project, note_id: str) -> Project:
    """Drop the note with ``note_id``; a miss returns ``project`` itself."""

    for index, note in enumerate(project.notes):
        if note.id == note_id:
            return replace(project, notes=project.notes[:index] + project.notes[index + 1 :])
    return project


def reset_project(*, greeting: str = GREETING_TEXT, now: int | None = None) -> Project:
    """Return a fresh project seeded with a single assistant greeting."""

    seed = Message(
        id=new_identifier(),
        role=Role.ASSISTANT,
        content=greeting,
        timestamp=now_ms() if now is None else now,
    )
    return Project(id=DEFAULT_PROJECT_ID, chat_history=(seed,))


class ProjectSession:
    """Owns the live :class:`Project` and persists every accepted transition."""

    def __init__(
        self,
        store: "ProjectStore",
        project: Project | None = None,
        *,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        self._store = store
        self._project = project if project is not None else reset_project()
        self._diagnostics = diagnostics
        self.last_save_ok: bool | None = None

    @classmethod
    def open(cls, store: "ProjectStore", *, diagnostics: DiagnosticLog | None = None) -> "ProjectSession":
        project = store.load()
        if project is None:
            logger.info("No saved project at %s; starting fresh", store.path)
        return cls(store, project, diagnostics=diagnostics)

    @property
    def project(self) -> Project:
        return self._project

    def _commit(self, project: Project) -> bool:
        if project is self._project:
            return False
        self._project = project
        self.last_save_ok = self._store.save(project)
        return True

    def append_message(self, message: Message) -> None:
        self._commit(append_message(self._project, message))

    def add_note(self, title: str, content: str) -> bool:
        return self._commit(add_note(self._project, title, content))

    def delete_note(self, note_id: str) -> bool:
        return self._commit(delete_note(self._project, note_id))

    def reset(self) -> Project:
        self._project = reset_project(greeting=RESET_GREETING_TEXT)
        self._store.clear()
        self.last_save_ok = self._store.save(self._project)
        if self._diagnostics is not None:
            self._diagnostics.record("INFO", "project.reset", project_id=self._project.id)
        return self._project


__all__ = [
    "DEFAULT_PROJECT_ID",
    "ProjectSession",
    "add_note",
    "append_message",
    "delete_note",
    "new_identifier",
    "now_ms",
    "reset_project",
]

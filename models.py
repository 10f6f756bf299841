"""Shared dataclasses for the research project record and chat transcript."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence, Union


class Role(str, Enum):
    """Author of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class WebCitation:
    """Web page used by the model to ground a reply."""

    uri: str
    title: str | None = None

    def asdict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"uri": self.uri}
        if self.title is not None:
            body["title"] = self.title
        return {"web": body}


@dataclass(frozen=True)
class PlaceCitation:
    """Map place used by the model to ground a reply."""

    uri: str
    title: str | None = None

    def asdict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"uri": self.uri}
        if self.title is not None:
            body["title"] = self.title
        return {"maps": body}


Citation = Union[WebCitation, PlaceCitation]

_CITATION_KINDS: dict[str, type] = {
    "web": WebCitation,
    "maps": PlaceCitation,
}


def parse_citation(payload: object) -> Citation | None:
    """Return a typed citation, or ``None`` for variants we do not render."""

    if isinstance(payload, (WebCitation, PlaceCitation)):
        return payload
    if not isinstance(payload, Mapping):
        return None
    for key, kind in _CITATION_KINDS.items():
        body = payload.get(key)
        if not isinstance(body, Mapping):
            continue
        uri = body.get("uri")
        if not isinstance(uri, str) or not uri:
            return None
        title = body.get("title")
        return kind(uri=uri, title=title if isinstance(title, str) else None)
    return None


def parse_citations(payload: Iterable[object] | None) -> tuple[Citation, ...]:
    if not payload:
        return tuple()
    citations = (parse_citation(item) for item in payload)
    return tuple(citation for citation in citations if citation is not None)


def _require(payload: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(f"field {key!r} is missing or has the wrong type")
    return value


def _timestamp(payload: Mapping[str, Any], key: str) -> int:
    value = _require(payload, key, (int, float))
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"field {key!r} is not a finite number")
    return int(value)


@dataclass(frozen=True)
class Message:
    """One turn of the chat transcript."""

    id: str
    role: Role
    content: str
    timestamp: int
    sources: tuple[Citation, ...] | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Message":
        if not isinstance(payload, Mapping):
            raise ValueError("message must be an object")
        try:
            role = Role(payload.get("role"))
        except ValueError as exc:
            raise ValueError(f"unknown message role {payload.get('role')!r}") from exc
        raw_sources = payload.get("sources")
        sources: tuple[Citation, ...] | None = None
        if raw_sources is not None:
            if not isinstance(raw_sources, Sequence) or isinstance(raw_sources, str):
                raise ValueError("field 'sources' must be a list")
            sources = parse_citations(raw_sources)
        return cls(
            id=str(_require(payload, "id", (str, int))),
            role=role,
            content=_require(payload, "content", str),
            timestamp=_timestamp(payload, "timestamp"),
            sources=sources,
        )

    def asdict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp,
        }
        if self.sources is not None:
            data["sources"] = [citation.asdict() for citation in self.sources]
        return data


@dataclass(frozen=True)
class Note:
    """A research memo written by the student."""

    id: str
    title: str
    content: str
    created_at: int

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Note":
        if not isinstance(payload, Mapping):
            raise ValueError("note must be an object")
        return cls(
            id=str(_require(payload, "id", (str, int))),
            title=_require(payload, "title", str),
            content=_require(payload, "content", str),
            created_at=_timestamp(payload, "createdAt"),
        )

    def asdict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class Project:
    """Root aggregate: the whole research session of one student.

    ``notes`` is kept newest first and ``chat_history`` oldest first. Both are
    tuples so a loaded value can only change by being replaced.
    """

    id: str
    goal: str = ""
    questions: tuple[str, ...] = field(default_factory=tuple)
    notes: tuple[Note, ...] = field(default_factory=tuple)
    chat_history: tuple[Message, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Project":
        if not isinstance(payload, Mapping):
            raise ValueError("project must be an object")
        questions = _require(payload, "questions", list)
        notes = _require(payload, "notes", list)
        history = _require(payload, "chatHistory", list)
        if not all(isinstance(item, str) for item in questions):
            raise ValueError("field 'questions' must hold strings")
        return cls(
            id=str(_require(payload, "id", (str, int))),
            goal=_require(payload, "goal", str),
            questions=tuple(questions),
            notes=tuple(Note.from_dict(item) for item in notes),
            chat_history=tuple(Message.from_dict(item) for item in history),
        )

    def asdict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "goal": self.goal,
            "questions": list(self.questions),
            "notes": [note.asdict() for note in self.notes],
            "chatHistory": [message.asdict() for message in self.chat_history],
        }


__all__ = [
    "Citation",
    "Message",
    "Note",
    "PlaceCitation",
    "Project",
    "Role",
    "WebCitation",
    "parse_citation",
    "parse_citations",
]

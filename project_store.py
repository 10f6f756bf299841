"""Single-document JSON store for the research project record."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from diagnostics import DiagnosticLog
from models import Project

logger = logging.getLogger(__name__)

STORAGE_KEY = "research_project"


@dataclass
class ProjectStore:
    """Reads and writes one serialized :class:`Project` under a fixed key.

    Only one project is ever resident. A missing or unreadable document loads
    as ``None`` so callers can fall back to a fresh default; a failed write is
    reported through the return value and never raised.
    """

    data_dir: str | os.PathLike[str]
    key: str = STORAGE_KEY
    diagnostics: DiagnosticLog | None = None

    @property
    def path(self) -> Path:
        return Path(self.data_dir) / f"{self.key}.json"

    def _record(self, level: str, event: str, **detail) -> None:
        if self.diagnostics is not None:
            self.diagnostics.record(level, event, **detail)
        else:
            logger.warning("%s %s", event, detail)

    def load(self) -> Project | None:
        path = self.path
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            self._record("ERROR", "persistence.load_failed", path=str(path), error=str(exc))
            return None
        try:
            payload = json.loads(raw)
            return Project.from_dict(payload)
        except (json.JSONDecodeError, ValueError, TypeError, OverflowError, RecursionError) as exc:
            self._record("ERROR", "persistence.load_failed", path=str(path), error=str(exc))
            return None

    def save(self, project: Project) -> bool:
        path = self.path
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            payload = json.dumps(project.asdict(), ensure_ascii=False)
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            self._record("ERROR", "persistence.save_failed", path=str(path), error=str(exc))
            return False
        return True

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            self._record("ERROR", "persistence.clear_failed", path=str(self.path), error=str(exc))


__all__ = ["ProjectStore", "STORAGE_KEY"]

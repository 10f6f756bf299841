"""Application configuration helpers for the Streamlit surface."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import streamlit as st


DEFAULT_MODEL_NAME = "gemini-2.5-flash"
# One project file per host: every browser session on the same Streamlit server
# reads and writes it, so deploy one instance (or one data dir) per student.
DEFAULT_DATA_DIR = ".mirai"
DEFAULT_STORAGE_KEY = "research_project"


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration bundle for the research companion."""

    genai_api_key: str | None
    model_name: str
    enable_search_grounding: bool
    data_dir: str
    storage_key: str
    log_level: int


def _safe_secret(key: str) -> Any:
    """Return a Streamlit secret when available."""

    try:
        return st.secrets.get(key)
    except Exception:
        return None


def _setting(key: str, default: Any = None) -> Any:
    value = _safe_secret(key)
    if value is None or value == "":
        value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _coerce_bool(value: Any, default: bool = False) -> bool:
    """Parse truthy/falsey strings and primitives into booleans."""

    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if not text:
        return default
    if text in {"1", "true", "yes", "on", "enabled", "enable"}:
        return True
    if text in {"0", "false", "no", "off", "disabled", "disable"}:
        return False
    return default


def _coerce_log_level(value: Any, default: int = logging.INFO) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value or "").strip().upper())
    return level if isinstance(level, int) else default


def load_settings() -> AppSettings:
    """Collect runtime configuration from secrets and the environment."""

    api_key = _setting("API_KEY")
    return AppSettings(
        genai_api_key=str(api_key) if api_key else None,
        model_name=str(_setting("GEMINI_MODEL", DEFAULT_MODEL_NAME)),
        enable_search_grounding=_coerce_bool(_setting("ENABLE_SEARCH_GROUNDING"), default=True),
        data_dir=str(_setting("MIRAI_DATA_DIR", DEFAULT_DATA_DIR)),
        storage_key=str(_setting("MIRAI_STORAGE_KEY", DEFAULT_STORAGE_KEY)),
        log_level=_coerce_log_level(_setting("MIRAI_LOG_LEVEL")),
    )


__all__ = ["AppSettings", "DEFAULT_MODEL_NAME", "load_settings"]

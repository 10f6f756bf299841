"""Gemini request/response gateway with Google Search grounding."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from google import genai
from google.genai import types

from models import Citation, Message, parse_citations
from services.prompt_service import SYSTEM_INSTRUCTION, build_contents

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class GatewayError(RuntimeError):
    """Raised for any transport, provider or response failure."""


@dataclass(frozen=True)
class GatewayReply:
    text: str
    sources: tuple[Citation, ...] = field(default_factory=tuple)


def _chunk_payload(chunk: Any) -> Any:
    if isinstance(chunk, Mapping):
        return chunk
    dump = getattr(chunk, "model_dump", None)
    if callable(dump):
        return dump(exclude_none=True)
    return None


def _extract_sources(response: Any) -> tuple[Citation, ...]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return tuple()
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []
    return parse_citations(_chunk_payload(chunk) for chunk in chunks)


class GeminiGateway:
    """Sends one conversation turn to Gemini and returns text plus citations."""

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_MODEL,
        client: Any | None = None,
        enable_search: bool = True,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ) -> None:
        self._client = client if client is not None else genai.Client(api_key=api_key)
        self.model = model
        self.enable_search = enable_search
        self.system_instruction = system_instruction

    def _config(self) -> types.GenerateContentConfig:
        tools = [types.Tool(google_search=types.GoogleSearch())] if self.enable_search else None
        return types.GenerateContentConfig(
            system_instruction=self.system_instruction,
            tools=tools,
        )

    def send_message(self, history: Sequence[Message], message: str) -> GatewayReply:
        contents = build_contents(history, message)
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=contents,
                config=self._config(),
            )
            text = getattr(response, "text", None) or ""
            sources = _extract_sources(response)
        except Exception as exc:
            logger.exception("Gemini request failed (model=%s)", self.model)
            raise GatewayError(str(exc) or exc.__class__.__name__) from exc
        logger.debug("Gemini reply: %s chars, %s sources", len(text), len(sources))
        return GatewayReply(text=text, sources=sources)


__all__ = ["DEFAULT_MODEL", "GatewayError", "GatewayReply", "GeminiGateway"]

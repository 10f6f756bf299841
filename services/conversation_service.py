"""One send/respond cycle between the student and the model gateway."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Protocol, Sequence

from diagnostics import DiagnosticLog
from models import Message, Role
from services.gemini_gateway import GatewayError, GatewayReply
from services.notebook_service import ProjectSession, new_identifier, now_ms
from services.prompt_service import APOLOGY_TEXT
from validators import clean_message_input

logger = logging.getLogger(__name__)


class ModelGateway(Protocol):
    def send_message(self, history: Sequence[Message], message: str) -> GatewayReply: ...


class CycleState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class CycleOutcome(str, Enum):
    REJECTED = "rejected"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ConversationOrchestrator:
    """Drives ``IDLE -> SENDING -> (SUCCEEDED | FAILED) -> IDLE``.

    At most one gateway call is in flight. A failed call leaves the student's
    message unanswered and is only written to the diagnostic log, so the
    student can simply send again.
    """

    def __init__(
        self,
        session: ProjectSession,
        gateway: ModelGateway,
        *,
        diagnostics: DiagnosticLog | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.session = session
        self.gateway = gateway
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self._clock = clock
        self.state = CycleState.IDLE
        self.last_outcome: CycleState | None = None

    @property
    def is_sending(self) -> bool:
        return self.state is CycleState.SENDING

    def send(self, text: str | None) -> CycleOutcome:
        message = clean_message_input(text)
        if message is None or self.is_sending:
            return CycleOutcome.REJECTED

        prior_history = self.session.project.chat_history
        self.session.append_message(
            Message(id=new_identifier(), role=Role.USER, content=message, timestamp=self._clock())
        )
        self.state = CycleState.SENDING
        try:
            reply = self.gateway.send_message(prior_history, message)
        except GatewayError as exc:
            self.diagnostics.record(
                "ERROR",
                "gateway.failed",
                error=str(exc),
                history_length=len(prior_history),
            )
            self._finish(CycleState.FAILED)
            return CycleOutcome.FAILED
        except BaseException:
            self.state = CycleState.IDLE
            raise

        self.session.append_message(
            Message(
                id=new_identifier(),
                role=Role.ASSISTANT,
                content=reply.text or APOLOGY_TEXT,
                timestamp=self._clock(),
                sources=tuple(reply.sources or ()),
            )
        )
        self._finish(CycleState.SUCCEEDED)
        return CycleOutcome.SUCCEEDED

    def _finish(self, outcome: CycleState) -> None:
        self.last_outcome = outcome
        self.state = CycleState.IDLE
        logger.debug("Conversation cycle finished: %s", outcome.value)


__all__ = ["ConversationOrchestrator", "CycleOutcome", "CycleState", "ModelGateway"]

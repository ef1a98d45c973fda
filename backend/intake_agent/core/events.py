from dataclasses import dataclass
from typing import Any, Literal


@dataclass
class IntakeEvent:
    """Base class for all intake session events."""
    pass


@dataclass
class IntakeStatusEvent(IntakeEvent):
    """Submission flow status change."""

    status: Literal[
        "submitting",
        "rejected",
        "ignored",
        "reset",
        "stale_discarded",
    ]
    attempt: int


@dataclass
class IntakeResultEvent(IntakeEvent):
    """Terminal outcome of one submission attempt."""

    success: bool
    attempt: int
    data: dict[str, Any]
    error: dict[str, Any] | None = None

    @property
    def payload(self):
        return {
            "type": "intake_result",
            "attempt": self.attempt,
            "success": self.success,
            "data": self.data,
            "error": self.error,
        }

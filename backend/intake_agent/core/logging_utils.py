"""Structured JSON logging utilities for intake tracing."""
from __future__ import annotations

import contextvars
import json
import logging
import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Mapping

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

_session_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "intake_session_id",
    default=None,
)
_attempt_id_ctx: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "intake_attempt_id",
    default=None,
)

_metrics_lock = threading.Lock()
_session_tallies: dict[str, dict[str, _StageTally]] = {}

_level_map: dict[LogLevelName, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _get_logger() -> logging.Logger:
    logger = logging.getLogger("intake_agent.structured")
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def set_session_id(session_id: str | None) -> None:
    """Store the active intake session id for the current context."""
    _session_id_ctx.set(session_id)


def get_session_id() -> str | None:
    """Return the active intake session id."""
    return _session_id_ctx.get()


def set_attempt_id(attempt_id: int | None) -> None:
    """Store the active submission attempt number for the current context."""
    _attempt_id_ctx.set(attempt_id)


def get_attempt_id() -> int | None:
    """Return the active submission attempt number."""
    return _attempt_id_ctx.get()


def clear_log_context() -> None:
    """Reset session and attempt tracing metadata for the current context."""
    set_session_id(None)
    set_attempt_id(None)


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_event(
    *,
    component: str,
    event: str,
    level: LogLevelName = "INFO",
    session_id: str | None = None,
    attempt_id: int | None = None,
    details: Mapping[str, Any] | None = None,
) -> None:
    """Emit a structured JSON log line to stdout."""
    resolved_session_id = session_id if session_id is not None else get_session_id()
    resolved_attempt_id = attempt_id if attempt_id is not None else get_attempt_id()
    payload: dict[str, Any] = {
        "ts": _iso_timestamp(),
        "level": level,
        "component": component,
        "event": event,
        "session_id": resolved_session_id,
        "attempt_id": resolved_attempt_id,
        "details": dict(details or {}),
    }
    _get_logger().log(_level_map[level], json.dumps(payload, ensure_ascii=True, separators=(",", ":")))


@dataclass
class _StageTally:
    count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0
    status_counts: dict[str, int] = field(default_factory=dict)

    def add(self, duration_ms: float, status: str) -> None:
        self.count += 1
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)
        self.status_counts[status] = self.status_counts.get(status, 0) + 1

    def summary(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "avg_ms": round(self.total_ms / self.count, 3),
            "max_ms": round(self.max_ms, 3),
            "status_counts": dict(self.status_counts),
        }


def log_latency_event(
    *,
    component: str,
    event: str,
    stage: str,
    duration_s: float,
    status: str,
    attempt_id: int | None = None,
    level: LogLevelName = "INFO",
    details: Mapping[str, Any] | None = None,
) -> None:
    """Emit a latency log event and add it to the session's tally for `stage`."""
    duration_ms = round(max(duration_s, 0.0) * 1000.0, 3)
    session_id = get_session_id()
    if session_id:
        with _metrics_lock:
            tallies = _session_tallies.setdefault(session_id, {})
            tallies.setdefault(stage, _StageTally()).add(duration_ms, status)

    payload_details = dict(details or {})
    payload_details.update({"stage": stage, "status": status, "duration_ms": duration_ms})
    log_event(
        component=component,
        event=event,
        level=level,
        attempt_id=attempt_id,
        details=payload_details,
    )


def pop_session_metrics_summary(session_id: str) -> dict[str, Any]:
    """Remove one session's latency tallies and return them as a summary."""
    with _metrics_lock:
        tallies = _session_tallies.pop(session_id, {})
    return {"stages": {stage: tally.summary() for stage, tally in tallies.items()}}

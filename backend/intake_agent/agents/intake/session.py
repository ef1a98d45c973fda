"""Intake session stream driving one submission flow from client messages."""
from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator, Mapping

from ...core import IntakeEvent, IntakeResultEvent, IntakeStatusEvent
from ...core.logging_utils import log_event
from .flow import IntakeSubmissionFlow, SubmissionOutcome


def _outcome_event(outcome: SubmissionOutcome) -> IntakeEvent:
    if outcome.status in ("succeeded", "failed"):
        return IntakeResultEvent(
            success=outcome.status == "succeeded",
            attempt=outcome.attempt,
            data=outcome.data(),
            error=outcome.error,
        )
    return IntakeStatusEvent(status=outcome.status, attempt=outcome.attempt)


async def intake_session_stream(
    message_stream: AsyncIterator[Mapping[str, Any]],
    flow: IntakeSubmissionFlow,
) -> AsyncIterator[IntakeEvent]:
    """
    Session loop for one client:
    Messages -> Flow transitions -> Status and result events

    Analyses run as background tasks so reset and further messages are
    handled while a call is in flight. In-flight calls are never aborted;
    their results come back as `stale_discarded` when superseded.
    When the message stream ends (client disconnect) the stream closes
    without waiting, and pending analysis tasks are cancelled.

    :param message_stream: decoded client messages ({"type": "submit" | "reset", ...})
    :param flow: submission flow owned by this session
    :yields: IntakeStatusEvent and IntakeResultEvent instances
    """
    queue: asyncio.Queue[IntakeEvent | None] = asyncio.Queue()
    in_flight: set[asyncio.Task[None]] = set()

    async def _resolve(attempt: int, symptoms: str) -> None:
        outcome = await flow.resolve(attempt, symptoms)
        await queue.put(_outcome_event(outcome))

    async def _produce() -> None:
        try:
            await _consume_messages()
        finally:
            queue.put_nowait(None)

    async def _consume_messages() -> None:
        async for message in message_stream:
            message_type = message.get("type")
            if message_type == "submit":
                symptoms = message.get("symptoms")
                outcome = flow.begin(symptoms if isinstance(symptoms, str) else "")
                await queue.put(_outcome_event(outcome))
                if outcome.status == "submitting":
                    task = asyncio.create_task(_resolve(outcome.attempt, outcome.symptoms))
                    in_flight.add(task)
                    task.add_done_callback(in_flight.discard)
            elif message_type == "reset":
                attempt = flow.reset()
                await queue.put(IntakeStatusEvent(status="reset", attempt=attempt))
            else:
                log_event(
                    component="intake_session",
                    event="message_ignored",
                    level="WARNING",
                    details={"type": str(message_type)},
                )

        if in_flight:
            log_event(
                component="intake_session",
                event="session_closed_in_flight",
                level="WARNING",
                details={"cancelled": len(in_flight)},
            )

    producer = asyncio.create_task(_produce())
    try:
        while True:
            event = await queue.get()
            if event is None:
                break
            yield event
        await producer
    finally:
        if not producer.done():
            producer.cancel()
        for task in list(in_flight):
            task.cancel()

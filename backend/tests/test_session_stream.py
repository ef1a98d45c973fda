import asyncio
import json
import threading

import pytest

from intake_agent.agents.intake import FlowState, IntakeSubmissionFlow, intake_session_stream
from intake_agent.core import IntakeResultEvent, IntakeStatusEvent
from intake_agent.services import InMemoryIntakeStore

ANALYSIS_JSON = json.dumps(
    {
        "briefSummary": "Ankle swollen after a fall, patient in moderate pain.",
        "extractedSymptoms": ["ankle swelling"],
        "possibleCauses": ["sprain", "fracture"],
        "redFlags": [],
        "riskScore": 35,
        "urgency": "Medium",
    }
)


class GatedAnalysisModel:
    """Blocks calls for `gated_text` until released; other calls return immediately."""

    def __init__(self, gated_text: str) -> None:
        self.gated_text = gated_text
        self.release = threading.Event()
        self.calls = 0

    def generate(self, prompt, options=None):
        self.calls += 1
        if self.gated_text in prompt:
            self.release.wait(timeout=5)
        return ANALYSIS_JSON


async def _messages(queue: asyncio.Queue):
    while True:
        message = await queue.get()
        if message is None:
            return
        yield message


async def _next(stream, timeout: float = 5.0):
    return await asyncio.wait_for(stream.__anext__(), timeout=timeout)


@pytest.mark.asyncio
async def test_reset_during_submission_discards_stale_result():
    model = GatedAnalysisModel("twisted ankle")
    store = InMemoryIntakeStore()
    flow = IntakeSubmissionFlow(model, store)
    inbox: asyncio.Queue = asyncio.Queue()
    stream = intake_session_stream(_messages(inbox), flow)

    await inbox.put({"type": "submit", "symptoms": "twisted ankle"})
    assert await _next(stream) == IntakeStatusEvent(status="submitting", attempt=1)

    # Still in flight: the session keeps handling messages.
    await inbox.put({"type": "reset"})
    assert await _next(stream) == IntakeStatusEvent(status="reset", attempt=2)

    await inbox.put({"type": "submit", "symptoms": "ankle still swollen"})
    assert await _next(stream) == IntakeStatusEvent(status="submitting", attempt=3)
    fresh = await _next(stream)
    assert isinstance(fresh, IntakeResultEvent)
    assert fresh.success is True
    assert fresh.attempt == 3

    model.release.set()
    assert await _next(stream) == IntakeStatusEvent(status="stale_discarded", attempt=1)

    await inbox.put(None)
    with pytest.raises(StopAsyncIteration):
        await _next(stream)

    assert flow.state is FlowState.SUCCEEDED
    assert [record.raw_symptoms for record in store.records] == ["ankle still swollen"]


@pytest.mark.asyncio
async def test_second_submit_while_in_flight_is_ignored():
    model = GatedAnalysisModel("first")
    store = InMemoryIntakeStore()
    flow = IntakeSubmissionFlow(model, store)
    inbox: asyncio.Queue = asyncio.Queue()
    stream = intake_session_stream(_messages(inbox), flow)

    await inbox.put({"type": "submit", "symptoms": "first"})
    await inbox.put({"type": "submit", "symptoms": "second"})
    await inbox.put({"type": "unknown"})

    assert await _next(stream) == IntakeStatusEvent(status="submitting", attempt=1)
    assert await _next(stream) == IntakeStatusEvent(status="ignored", attempt=1)

    model.release.set()
    result = await _next(stream)
    assert isinstance(result, IntakeResultEvent)
    assert result.success is True

    await inbox.put(None)
    with pytest.raises(StopAsyncIteration):
        await _next(stream)

    assert model.calls == 1
    assert len(store) == 1


@pytest.mark.asyncio
async def test_end_of_messages_closes_without_waiting_for_analysis():
    model = GatedAnalysisModel("slow narrative")
    store = InMemoryIntakeStore()
    flow = IntakeSubmissionFlow(model, store)
    inbox: asyncio.Queue = asyncio.Queue()
    stream = intake_session_stream(_messages(inbox), flow)

    await inbox.put({"type": "submit", "symptoms": "slow narrative"})
    assert await _next(stream) == IntakeStatusEvent(status="submitting", attempt=1)

    await inbox.put(None)
    try:
        with pytest.raises(StopAsyncIteration):
            await _next(stream, timeout=1.0)
    finally:
        model.release.set()

    assert len(store) == 0

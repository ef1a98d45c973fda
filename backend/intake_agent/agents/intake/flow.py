"""Submission flow: validate, analyze, record, and surface the outcome."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Literal

from ...core.error_mapping import build_analysis_error_payload
from ...core.logging_utils import log_event, set_attempt_id
from ...core.models import AIAnalysis, IntakeRecord
from ...services import AnalysisFailure, BaseIntakeStore
from .utils import new_intake_id
from .workflows import build_intake_record, run_intake_analysis


class FlowState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


OutcomeStatus = Literal[
    "submitting",
    "rejected",
    "ignored",
    "succeeded",
    "failed",
    "stale_discarded",
]


@dataclass(frozen=True)
class SubmissionOutcome:
    status: OutcomeStatus
    attempt: int
    symptoms: str = ""
    analysis: AIAnalysis | None = None
    record: IntakeRecord | None = None
    error: dict[str, Any] | None = None

    def data(self) -> dict[str, Any]:
        if self.analysis is None or self.record is None:
            return {}
        return {
            "analysis": self.analysis.to_payload(),
            "intake": self.record.to_payload(),
        }


class IntakeSubmissionFlow:
    """
    State machine for one submitter:

        idle -> submitting -> succeeded | failed
        failed -> submitting on a retried submit
        any state -> idle on reset()

    Every attempt gets a number from a monotonically increasing counter.
    reset() and newer submissions bump the counter, so a response that
    resolves under an older number is discarded instead of applied.
    """

    def __init__(
        self,
        analysis_model,
        store: BaseIntakeStore,
        *,
        id_factory: Callable[[], str] | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.analysis_model = analysis_model
        self.store = store
        self._id_factory = id_factory or (lambda: new_intake_id(store.contains_id))
        self._now = now
        self._attempt = 0
        self.state = FlowState.IDLE
        self.input_text = ""
        self.result: AIAnalysis | None = None
        self.record: IntakeRecord | None = None
        self.error: dict[str, Any] | None = None

    @property
    def attempt(self) -> int:
        return self._attempt

    def begin(self, symptoms: str) -> SubmissionOutcome:
        """Apply the submit guards and enter `submitting` when they pass."""
        if self.state in (FlowState.SUBMITTING, FlowState.SUCCEEDED):
            # A shown result must be reset before the next submission.
            log_event(
                component="submission_flow",
                event="submission_ignored",
                attempt_id=self._attempt,
                details={
                    "reason": "in_flight"
                    if self.state is FlowState.SUBMITTING
                    else "result_shown"
                },
            )
            return SubmissionOutcome(status="ignored", attempt=self._attempt)
        if not symptoms.strip():
            return SubmissionOutcome(status="rejected", attempt=self._attempt)

        self._attempt += 1
        set_attempt_id(self._attempt)
        self.state = FlowState.SUBMITTING
        self.input_text = symptoms
        self.result = None
        self.record = None
        self.error = None
        log_event(
            component="submission_flow",
            event="submission_started",
            details={"chars": len(symptoms)},
        )
        return SubmissionOutcome(
            status="submitting",
            attempt=self._attempt,
            symptoms=symptoms,
        )

    async def resolve(self, attempt: int, symptoms: str) -> SubmissionOutcome:
        """Run the analysis for a begun attempt and apply it unless superseded."""
        try:
            analysis = await asyncio.to_thread(
                run_intake_analysis, self.analysis_model, symptoms
            )
        except AnalysisFailure as err:
            if attempt != self._attempt:
                return self._discard(attempt)
            self.state = FlowState.FAILED
            self.error = build_analysis_error_payload(err)
            log_event(
                component="submission_flow",
                event="submission_failed",
                level="WARNING",
                attempt_id=attempt,
                details={"code": self.error["code"]},
            )
            return SubmissionOutcome(status="failed", attempt=attempt, error=self.error)

        if attempt != self._attempt:
            return self._discard(attempt)

        record = build_intake_record(
            symptoms,
            analysis,
            id_factory=self._id_factory,
            now=self._now,
        )
        self.store.append(record)
        self.state = FlowState.SUCCEEDED
        self.result = analysis
        self.record = record
        log_event(
            component="submission_flow",
            event="submission_succeeded",
            attempt_id=attempt,
            details={"intake_id": record.id, "urgency": analysis.urgency.value},
        )
        return SubmissionOutcome(
            status="succeeded",
            attempt=attempt,
            symptoms=symptoms,
            analysis=analysis,
            record=record,
        )

    async def submit(self, symptoms: str) -> SubmissionOutcome:
        """Begin and resolve one submission."""
        outcome = self.begin(symptoms)
        if outcome.status != "submitting":
            return outcome
        return await self.resolve(outcome.attempt, symptoms)

    def reset(self) -> int:
        """Return to idle, clearing input, result and error."""
        previous = self.state
        self._attempt += 1
        self.state = FlowState.IDLE
        self.input_text = ""
        self.result = None
        self.record = None
        self.error = None
        log_event(
            component="submission_flow",
            event="submission_reset",
            attempt_id=self._attempt,
            details={"previous_state": previous.value},
        )
        return self._attempt

    def _discard(self, attempt: int) -> SubmissionOutcome:
        log_event(
            component="submission_flow",
            event="submission_stale_discarded",
            attempt_id=attempt,
            details={"current_attempt": self._attempt},
        )
        return SubmissionOutcome(status="stale_discarded", attempt=attempt)

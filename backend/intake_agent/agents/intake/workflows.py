"""Intake analysis workflow functions."""

import json
import time
from datetime import datetime
from typing import Any, Callable

from pydantic import ValidationError

from ...core.logging_utils import log_event, log_latency_event
from ...core.models import AIAnalysis, IntakeRecord, Urgency
from ...services import (
    AnalysisEmptyResponseError,
    AnalysisFailure,
    AnalysisInvalidPayloadError,
    AnalysisOptions,
    AnalysisTransportError,
)
from .prompts import INTAKE_ANALYSIS_PROMPT, INTAKE_ANALYSIS_SYSTEM_INSTRUCTION
from .utils import extract_json_from_text, format_timestamp, new_intake_id

ANALYSIS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "briefSummary": {
            "type": "STRING",
            "description": "A clinical yet humanized summary of the patient narrative.",
        },
        "extractedSymptoms": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Medical symptoms identified from user input.",
        },
        "possibleCauses": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Potential conditions for clinical context only.",
        },
        "redFlags": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Urgent warning signs or complications.",
        },
        "riskScore": {
            "type": "INTEGER",
            "description": "Risk level 0-100.",
        },
        "urgency": {
            "type": "STRING",
            "enum": [level.value for level in Urgency],
            "description": "Low, Medium, High, or Emergency.",
        },
    },
    "required": [
        "briefSummary",
        "extractedSymptoms",
        "possibleCauses",
        "redFlags",
        "riskScore",
        "urgency",
    ],
}


def _generate(analysis_model, prompt: str, options: AnalysisOptions) -> str:
    try:
        return analysis_model.generate(prompt, options=options)
    except AnalysisFailure:
        raise
    except Exception as err:
        raise AnalysisTransportError(str(err)) from err


def _parse_analysis(raw_output: str) -> AIAnalysis:
    if not isinstance(raw_output, str) or not raw_output.strip():
        raise AnalysisEmptyResponseError("No response received from the clinical engine.")

    try:
        parsed = json.loads(extract_json_from_text(raw_output))
    except json.JSONDecodeError as err:
        raise AnalysisInvalidPayloadError(
            f"Failed to parse analysis JSON: {err}"
        ) from err

    if not isinstance(parsed, dict):
        raise AnalysisInvalidPayloadError("Analysis JSON is not an object.")

    try:
        return AIAnalysis.model_validate(parsed)
    except ValidationError as err:
        raise AnalysisInvalidPayloadError(
            f"Analysis JSON does not match schema: {err}"
        ) from err


def run_intake_analysis(analysis_model, symptoms: str) -> AIAnalysis:
    """
    Sends the patient narrative with the fixed instruction and schema,
    then parses the response into an AIAnalysis.

    One attempt per call: no retry and no caching of identical text.

    :param analysis_model: service instance with generate()
    :param symptoms: patient narrative, already checked to be non-blank
    :return: structured analysis
    :raises AnalysisFailure: on transport, empty or malformed responses
    """
    prompt = INTAKE_ANALYSIS_PROMPT.format(symptoms=symptoms)
    options = AnalysisOptions(
        system_instruction=INTAKE_ANALYSIS_SYSTEM_INSTRUCTION,
        response_schema=ANALYSIS_RESPONSE_SCHEMA,
    )
    started_at = time.perf_counter()

    try:
        raw_output = _generate(analysis_model, prompt, options)
        analysis = _parse_analysis(raw_output)
    except AnalysisFailure as err:
        log_event(
            component="analysis_client",
            event="analysis_failed",
            level="ERROR",
            details={"error_type": type(err).__name__, "error": str(err)},
        )
        log_latency_event(
            component="analysis_client",
            event="analysis_latency",
            stage="analysis",
            duration_s=time.perf_counter() - started_at,
            status="failed",
            level="ERROR",
        )
        raise

    log_latency_event(
        component="analysis_client",
        event="analysis_latency",
        stage="analysis",
        duration_s=time.perf_counter() - started_at,
        status="completed",
        details={
            "urgency": analysis.urgency.value,
            "red_flags": len(analysis.red_flags),
        },
    )
    return analysis


def build_intake_record(
    symptoms: str,
    analysis: AIAnalysis,
    *,
    id_factory: Callable[[], str] = new_intake_id,
    now: Callable[[], datetime] = datetime.now,
) -> IntakeRecord:
    """Create the record for one successful submission."""
    return IntakeRecord(
        id=id_factory(),
        timestamp=format_timestamp(now()),
        raw_symptoms=symptoms,
        summary=analysis,
    )

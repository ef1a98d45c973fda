"""Intake agent module."""
from .flow import FlowState, IntakeSubmissionFlow, SubmissionOutcome
from .session import intake_session_stream
from .workflows import (
    ANALYSIS_RESPONSE_SCHEMA,
    build_intake_record,
    run_intake_analysis,
)
from .utils import extract_json_from_text, format_timestamp, new_intake_id

__all__ = [
    "FlowState",
    "IntakeSubmissionFlow",
    "SubmissionOutcome",
    "intake_session_stream",
    "ANALYSIS_RESPONSE_SCHEMA",
    "build_intake_record",
    "run_intake_analysis",
    "extract_json_from_text",
    "format_timestamp",
    "new_intake_id",
]

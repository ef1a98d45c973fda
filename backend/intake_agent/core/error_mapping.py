"""Shared error code mapping for analysis failures."""
from typing import Any

from ..services.analysis.base import (
    AnalysisEmptyResponseError,
    AnalysisInvalidPayloadError,
    AnalysisTransportError,
)

ANALYSIS_ERROR_CODE_TRANSPORT = "ANALYSIS_TRANSPORT_FAILED"
ANALYSIS_ERROR_CODE_EMPTY = "ANALYSIS_EMPTY_RESPONSE"
ANALYSIS_ERROR_CODE_INVALID_PAYLOAD = "ANALYSIS_INVALID_PAYLOAD"
ANALYSIS_ERROR_CODE_GENERIC = "ANALYSIS_FAILED"

USER_SAFE_ANALYSIS_MESSAGE = (
    "Unable to synthesize clinical data. Please check your input and try again."
)


def classify_analysis_error_code(error: BaseException) -> str:
    """Classify an analysis failure into a stable error code."""
    if isinstance(error, AnalysisTransportError):
        return ANALYSIS_ERROR_CODE_TRANSPORT
    if isinstance(error, AnalysisEmptyResponseError):
        return ANALYSIS_ERROR_CODE_EMPTY
    if isinstance(error, AnalysisInvalidPayloadError):
        return ANALYSIS_ERROR_CODE_INVALID_PAYLOAD
    return ANALYSIS_ERROR_CODE_GENERIC


def build_analysis_error_payload(error: BaseException) -> dict[str, Any]:
    """Build the user-facing error envelope.

    Provider detail never leaves the process; it is logged by the caller.
    """
    return {
        "code": classify_analysis_error_code(error),
        "message": USER_SAFE_ANALYSIS_MESSAGE,
    }

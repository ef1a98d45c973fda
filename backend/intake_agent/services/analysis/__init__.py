"""Structured analysis service module."""
from .base import (
    AnalysisEmptyResponseError,
    AnalysisFailure,
    AnalysisInvalidPayloadError,
    AnalysisOptions,
    AnalysisTransportError,
    BaseAnalysisModel,
)
from .gemini import GeminiAnalysisService, GeminiConfig

__all__ = [
    "BaseAnalysisModel",
    "AnalysisOptions",
    "AnalysisFailure",
    "AnalysisTransportError",
    "AnalysisEmptyResponseError",
    "AnalysisInvalidPayloadError",
    "GeminiAnalysisService",
    "GeminiConfig",
]

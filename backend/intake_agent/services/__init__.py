"""Intake services (structured analysis, record store)."""
from .analysis import (
    AnalysisEmptyResponseError,
    AnalysisFailure,
    AnalysisInvalidPayloadError,
    AnalysisOptions,
    AnalysisTransportError,
    BaseAnalysisModel,
    GeminiAnalysisService,
)
from .store import BaseIntakeStore, InMemoryIntakeStore, JsonFileIntakeStore

__all__ = [
    # Analysis
    "BaseAnalysisModel",
    "AnalysisOptions",
    "AnalysisFailure",
    "AnalysisTransportError",
    "AnalysisEmptyResponseError",
    "AnalysisInvalidPayloadError",
    "GeminiAnalysisService",
    # Store
    "BaseIntakeStore",
    "InMemoryIntakeStore",
    "JsonFileIntakeStore",
]

"""Base class for structured analysis services."""
import abc
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class AnalysisOptions:
    """Generation controls shared across analysis backends."""

    system_instruction: str | None = None
    response_schema: Mapping[str, Any] | None = None
    response_mime_type: str = "application/json"
    temperature: float | None = None


class AnalysisFailure(RuntimeError):
    """Base runtime error for analysis failures."""


class AnalysisTransportError(AnalysisFailure):
    """Raised when the analysis service cannot be reached or errors out."""


class AnalysisEmptyResponseError(AnalysisFailure):
    """Raised when the analysis service returns no content."""


class AnalysisInvalidPayloadError(AnalysisFailure):
    """Raised when the returned content does not match the analysis schema."""


class BaseAnalysisModel(abc.ABC):
    """Abstract base class for structured-generation services."""

    @abc.abstractmethod
    def generate(self, prompt: str, options: AnalysisOptions | None = None) -> str:
        """
        Generate a structured response from a prompt.

        :param prompt: Input text prompt
        :param options: Optional generation controls
        :return: Raw response text
        :raises AnalysisTransportError: when the call itself fails
        :raises AnalysisEmptyResponseError: when no text comes back
        """
        pass

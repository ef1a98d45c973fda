"""Google Gemini structured-output implementation."""
from __future__ import annotations

import os
from dataclasses import dataclass

from google import genai
from google.genai import types

from .base import (
    AnalysisEmptyResponseError,
    AnalysisOptions,
    AnalysisTransportError,
    BaseAnalysisModel,
)

_API_KEY_ENV_NAMES = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


@dataclass(frozen=True)
class GeminiConfig:
    """Configuration for the Gemini backend."""

    api_key: str
    model: str = "gemini-3-pro-preview"
    temperature: float | None = None

    @classmethod
    def from_env(cls) -> "GeminiConfig":
        api_key = ""
        for name in _API_KEY_ENV_NAMES:
            api_key = os.getenv(name, "").strip()
            if api_key:
                break
        if not api_key:
            raise ValueError(
                "GEMINI_API_KEY is required for the gemini analysis backend."
            )

        return cls(
            api_key=api_key,
            model=os.getenv("GEMINI_MODEL", "gemini-3-pro-preview").strip(),
            temperature=_get_optional_float_env("GEMINI_TEMPERATURE"),
        )


def _get_optional_float_env(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number") from err


class GeminiAnalysisService(BaseAnalysisModel):
    """Hosted Gemini model constrained by a JSON response schema."""

    def __init__(self, config: GeminiConfig | None = None, client=None) -> None:
        self.config = config or GeminiConfig.from_env()
        self.client = client or genai.Client(api_key=self.config.api_key)

    def _build_config(self, options: AnalysisOptions) -> types.GenerateContentConfig:
        temperature = (
            options.temperature
            if options.temperature is not None
            else self.config.temperature
        )
        return types.GenerateContentConfig(
            system_instruction=options.system_instruction,
            response_mime_type=options.response_mime_type,
            response_schema=dict(options.response_schema) if options.response_schema else None,
            temperature=temperature,
        )

    def generate(self, prompt: str, options: AnalysisOptions | None = None) -> str:
        generation_options = options or AnalysisOptions()
        try:
            response = self.client.models.generate_content(
                model=self.config.model,
                contents=prompt,
                config=self._build_config(generation_options),
            )
            text = response.text
        except Exception as err:
            raise AnalysisTransportError(str(err)) from err

        if not text or not text.strip():
            raise AnalysisEmptyResponseError(
                "No response received from the clinical engine."
            )
        return text

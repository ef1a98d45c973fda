"""Domain models for intake records and their AI analysis."""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Urgency(str, Enum):
    """Closed set of clinical priority labels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    EMERGENCY = "Emergency"


class _CamelModel(BaseModel):
    # Snapshot and wire keys are camelCase; Python attributes stay snake_case.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class AIAnalysis(_CamelModel):
    """Structured clinical summary returned by the analysis service.

    Only the structure is checked here. Risk score bounds and the agreement
    between urgency and risk score are left to the provider.
    """

    brief_summary: str = Field(..., min_length=1)
    extracted_symptoms: List[str]
    possible_causes: List[str]
    red_flags: List[str]
    risk_score: int
    urgency: Urgency


class IntakeRecord(_CamelModel):
    """One submitted narrative together with its analysis."""

    id: str = Field(..., min_length=1)
    timestamp: str
    raw_symptoms: str
    summary: AIAnalysis

"""API request and response schemas for Clinexa Intake."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List, Literal, Optional, Any


# ============= Request Schemas =============

class IntakeRequest(BaseModel):
    """Request schema for /intake.

    Blank text is accepted here and turned into an inert submission by the
    flow rather than a validation error.
    """
    symptoms: str = Field(
        ...,
        description="Patient narrative describing current symptoms",
    )
    model_config = ConfigDict(extra="forbid")


# ============= Response Schemas =============

class IntakeSubmissionResponse(BaseModel):
    """Envelope response from /intake."""

    success: bool = Field(..., description="Whether the submission produced an intake")
    state: Literal["idle", "succeeded", "failed"] = Field(
        ...,
        description="Submission flow state after the request",
    )
    data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Analysis and stored intake when success is true",
    )
    error: Optional[Dict[str, Any]] = Field(
        default=None,
        description="User-safe error metadata when the analysis failed",
    )
    model_config = ConfigDict(extra="forbid")


class DashboardCounters(BaseModel):
    """Aggregate counters, always computed over the full store."""

    critical: int = Field(..., description="Intakes at Emergency urgency")
    high_priority: int = Field(..., description="Intakes at High urgency")
    total: int = Field(..., description="Total intake volume")
    by_urgency: Dict[str, int] = Field(
        default_factory=dict,
        description="Count per urgency level",
    )


class DashboardResponse(BaseModel):
    """Response from /dashboard."""

    counters: DashboardCounters
    intakes: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Filtered intakes, most recent first",
    )
    selected: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Selected intake detail, null when nothing matches",
    )


class IntakeDetailResponse(BaseModel):
    """Response from /dashboard/intakes/{intake_id}."""

    intake: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Intake detail, null shows the placeholder",
    )


class StatusResponse(BaseModel):
    """Generic status response for health check endpoints."""
    status: str = Field(..., description="Service status")
    system: Optional[str] = Field(None, description="System identifier")

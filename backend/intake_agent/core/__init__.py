"""Core abstractions and types for the intake service."""
from .events import IntakeEvent, IntakeStatusEvent, IntakeResultEvent
from .models import AIAnalysis, IntakeRecord, Urgency
from .schemas import (
    IntakeRequest,
    IntakeSubmissionResponse,
    DashboardCounters,
    DashboardResponse,
    IntakeDetailResponse,
    StatusResponse,
)

__all__ = [
    # Events
    "IntakeEvent",
    "IntakeStatusEvent",
    "IntakeResultEvent",
    # Models
    "AIAnalysis",
    "IntakeRecord",
    "Urgency",
    # Schemas
    "IntakeRequest",
    "IntakeSubmissionResponse",
    "DashboardCounters",
    "DashboardResponse",
    "IntakeDetailResponse",
    "StatusResponse",
]

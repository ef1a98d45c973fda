"""
Intake Agent Package for Clinexa.

This package turns free-text patient narratives into structured clinical
intake records:
- Structured analysis using Google Gemini with a fixed response schema
- Append-only intake store persisted as a JSON snapshot
- Submission flow with stale-response discarding
- Read-only dashboard queries for clinicians

Core components:
    - core: Domain models, events, API schemas, logging and error mapping
    - services: Analysis and store implementations
    - agents: Intake submission flow and session stream
    - dashboard: Filtering, ordering and urgency counters
    - config: Service configuration and factory
"""

# Submission flow (primary public API)
from .agents.intake import IntakeSubmissionFlow, intake_session_stream, run_intake_analysis

# Domain models and events
from .core import (
    AIAnalysis,
    IntakeRecord,
    Urgency,
    IntakeEvent,
    IntakeStatusEvent,
    IntakeResultEvent,
)

# Dashboard queries
from .dashboard import build_dashboard_view

# Configuration (for service initialization)
from .config import get_services, get_analysis_service, get_intake_store

__all__ = [
    # Flow
    "IntakeSubmissionFlow",
    "intake_session_stream",
    "run_intake_analysis",
    # Models
    "AIAnalysis",
    "IntakeRecord",
    "Urgency",
    # Events
    "IntakeEvent",
    "IntakeStatusEvent",
    "IntakeResultEvent",
    # Dashboard
    "build_dashboard_view",
    # Config
    "get_services",
    "get_analysis_service",
    "get_intake_store",
]

__version__ = "1.0.0"

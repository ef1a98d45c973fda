"""Configuration module for the intake service."""
from .settings import (
    get_services,
    get_analysis_service,
    get_intake_store,
)

__all__ = [
    "get_services",
    "get_analysis_service",
    "get_intake_store",
]

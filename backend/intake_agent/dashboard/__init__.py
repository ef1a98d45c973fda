"""Clinician dashboard query view."""
from .query import (
    build_dashboard_view,
    count_by_urgency,
    display_order,
    filter_intakes,
    select_detail,
)

__all__ = [
    "build_dashboard_view",
    "count_by_urgency",
    "display_order",
    "filter_intakes",
    "select_detail",
]

"""Read-only dashboard queries over the intake store snapshot."""
from typing import Any, Sequence

from ..core.models import IntakeRecord, Urgency


def filter_intakes(records: Sequence[IntakeRecord], term: str) -> list[IntakeRecord]:
    """Case-insensitive substring match on id or brief summary, original order kept."""
    needle = term.lower()
    if not needle:
        return list(records)
    return [
        record
        for record in records
        if needle in record.id.lower() or needle in record.summary.brief_summary.lower()
    ]


def display_order(records: Sequence[IntakeRecord]) -> list[IntakeRecord]:
    """Most recent first."""
    return list(reversed(records))


def count_by_urgency(records: Sequence[IntakeRecord], level: Urgency | str) -> int:
    target = Urgency(level)
    return sum(1 for record in records if record.summary.urgency == target)


def select_detail(records: Sequence[IntakeRecord], intake_id: str | None) -> IntakeRecord | None:
    if not intake_id:
        return None
    for record in records:
        if record.id == intake_id:
            return record
    return None


def build_dashboard_view(
    records: Sequence[IntakeRecord],
    term: str = "",
    selected_id: str | None = None,
) -> dict[str, Any]:
    """
    Assemble the clinician dashboard payload.

    Counters are computed over the full store, never the filtered list;
    the detail is looked up in the full store as well.

    :param records: current store snapshot
    :param term: search term, empty for all intakes
    :param selected_id: intake id chosen for the detail pane
    :return: dict with counters, intakes and selected
    """
    by_urgency = {level.value: count_by_urgency(records, level) for level in Urgency}
    selected = select_detail(records, selected_id)
    return {
        "counters": {
            "critical": by_urgency[Urgency.EMERGENCY.value],
            "high_priority": by_urgency[Urgency.HIGH.value],
            "total": len(records),
            "by_urgency": by_urgency,
        },
        "intakes": [record.to_payload() for record in display_order(filter_intakes(records, term))],
        "selected": selected.to_payload() if selected is not None else None,
    }

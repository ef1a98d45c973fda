import pytest

from intake_agent.core import AIAnalysis, IntakeRecord, Urgency
from intake_agent.dashboard import (
    build_dashboard_view,
    count_by_urgency,
    display_order,
    filter_intakes,
    select_detail,
)


def _record(intake_id: str, summary: str, urgency: str) -> IntakeRecord:
    return IntakeRecord(
        id=intake_id,
        timestamp="Oct 19, 2026, 9:15 AM",
        raw_symptoms=f"narrative for {intake_id}",
        summary=AIAnalysis(
            brief_summary=summary,
            extracted_symptoms=[],
            possible_causes=[],
            red_flags=[],
            risk_score=50,
            urgency=urgency,
        ),
    )


RECORDS = [
    _record("7KQ2M9X1AB00", "Crushing chest pain with sweating.", "Emergency"),
    _record("P4ZT81LLCD11", "Persistent migraine, light sensitive.", "Medium"),
    _record("Z9CHEST00EF2", "Mild cough after a cold.", "Low"),
    _record("B3RR55QQGH33", "High fever and stiff neck.", "High"),
]


def test_empty_term_returns_all_in_original_order():
    assert filter_intakes(RECORDS, "") == RECORDS


def test_filter_matches_id_or_summary_case_insensitively():
    matched = filter_intakes(RECORDS, "CHEST")
    assert [record.id for record in matched] == ["7KQ2M9X1AB00", "Z9CHEST00EF2"]

    assert [record.id for record in filter_intakes(RECORDS, "p4zt")] == ["P4ZT81LLCD11"]


@pytest.mark.parametrize("term", ["", "chest", "fever", "nothing-here"])
def test_filter_is_idempotent(term):
    once = filter_intakes(RECORDS, term)
    assert filter_intakes(once, term) == once


def test_display_order_is_most_recent_first():
    assert [record.id for record in display_order(RECORDS)] == [
        "B3RR55QQGH33",
        "Z9CHEST00EF2",
        "P4ZT81LLCD11",
        "7KQ2M9X1AB00",
    ]


def test_counts_on_empty_store_are_zero():
    assert all(count_by_urgency([], level) == 0 for level in Urgency)


def test_counts_sum_to_store_length():
    assert sum(count_by_urgency(RECORDS, level) for level in Urgency) == len(RECORDS)
    assert count_by_urgency(RECORDS, "Emergency") == 1
    assert count_by_urgency(RECORDS, Urgency.HIGH) == 1


def test_select_detail_returns_none_for_unknown_id():
    assert select_detail(RECORDS, "B3RR55QQGH33") is RECORDS[3]
    assert select_detail(RECORDS, "missing") is None
    assert select_detail(RECORDS, None) is None


def test_dashboard_counters_ignore_search_filter():
    view = build_dashboard_view(RECORDS, term="no such intake", selected_id="missing")

    assert view["intakes"] == []
    assert view["selected"] is None
    assert view["counters"] == {
        "critical": 1,
        "high_priority": 1,
        "total": 4,
        "by_urgency": {"Low": 1, "Medium": 1, "High": 1, "Emergency": 1},
    }


def test_dashboard_detail_resolves_outside_filtered_list():
    view = build_dashboard_view(RECORDS, term="migraine", selected_id="7KQ2M9X1AB00")

    assert [intake["id"] for intake in view["intakes"]] == ["P4ZT81LLCD11"]
    assert view["selected"]["summary"]["urgency"] == "Emergency"

"""Tests for the per-case drill-down table."""

from datetime import date
from decimal import Decimal

from timeverify_engines.case_breakdown import build_case_breakdown
from timeverify_engines.week import WeekWindow
from timeverify_kernel.domain.dtos import CaseDisplayInfo, CaseEntry

SUN = date(2025, 10, 5)
WINDOW = WeekWindow.of(SUN, date(2025, 10, 11))


def _entry(day_offset: int, case_id: int, hours: str) -> CaseEntry:
    return CaseEntry(
        employee_id=21000001,
        report_date=date(2025, 10, 5 + day_offset),
        case_id=case_id,
        hours=Decimal(hours),
    )


DISPLAY = {
    9001: CaseDisplayInfo(case_id=9001, display_tin="123-45-6789", display_name="ACME CORP"),
    9002: CaseDisplayInfo(case_id=9002, display_tin="01-2345678", display_name="WIDGETS"),
}


def test_rows_grouped_by_case_with_day_vector():
    rows = build_case_breakdown(
        window=WINDOW,
        entries=[_entry(1, 9001, "2"), _entry(1, 9001, "1.5"), _entry(3, 9001, "4")],
        display=DISPLAY,
    )
    assert len(rows) == 1
    row = rows[0]
    assert row.days["MON"] == Decimal("3.50")
    assert row.days["WED"] == Decimal("4.00")
    assert row.total == Decimal("7.50")
    assert row.display_name == "ACME CORP"


def test_rows_sorted_by_display_tin_string():
    rows = build_case_breakdown(
        window=WINDOW,
        entries=[_entry(1, 9001, "1"), _entry(2, 9002, "1")],
        display=DISPLAY,
    )
    assert [r.case_id for r in rows] == [9002, 9001]


def test_non_positive_totals_dropped():
    rows = build_case_breakdown(
        window=WINDOW,
        entries=[_entry(1, 9001, "0"), _entry(2, 9002, "2"), _entry(3, 9002, "-3")],
        display=DISPLAY,
    )
    assert rows == ()


def test_missing_display_info_uses_placeholders():
    rows = build_case_breakdown(window=WINDOW, entries=[_entry(0, 9003, "1")], display={})
    assert rows[0].display_tin == "9003"
    assert rows[0].display_name == "Unknown"


def test_day_values_sum_to_total():
    rows = build_case_breakdown(
        window=WINDOW,
        entries=[_entry(i, 9001, "1.33") for i in range(7)],
        display=DISPLAY,
    )
    assert sum(rows[0].days.as_dict().values()) == rows[0].total == Decimal("9.31")

"""
Weekly Summary Aggregator (``timeverify_engines.weekly_summary``).

Responsibility
--------------
Compute the group-view metrics for one employee over one week from the
employee's non-case and case records:

* ``tour_of_duty   = TOUR + case - ADJUSTMENT - SCHEDULE``
* ``adjusted_tour  = ADJUSTMENT - SCHEDULE``
* ``hours_worked   = case_direct_time = case``
* ``code_direct_time = CODE_DIRECT``
* ``overhead_time  = OVERHEAD``
* ``report_days``  -- distinct non-case dates (sentinel codes excluded) plus
  distinct case dates with no non-case record of any code on that date.
* ``last_date_eod`` -- latest date across both sources.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO clock reads.

Invariants enforced
-------------------
* A calendar date evidenced by both sources counts as one report day.
* Inactive or unknown codes contribute zero to every sum but still mark a
  date as having a non-case record.
* All sums are Decimal quantized to hundredths.

Failure modes
-------------
* ``ValueError`` if a record falls outside the window.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from timeverify_engines.classifier import CodeClassifier
from timeverify_engines.rules import SummaryRules
from timeverify_engines.tracer import traced_engine
from timeverify_engines.week import WeekWindow
from timeverify_kernel.domain.dtos import CaseEntry, EmployeeInfo, NonCaseEntry
from timeverify_kernel.domain.values import Category, quantize_hours
from timeverify_kernel.logging_config import get_logger

logger = get_logger("engines.weekly_summary")


@dataclass(frozen=True)
class WeeklySummary:
    """One employee's row in the group weekly view."""

    employee_id: int
    employee_name: str | None
    tour_of_duty: Decimal
    adjusted_tour: Decimal
    hours_worked: Decimal
    case_direct_time: Decimal
    code_direct_time: Decimal
    overhead_time: Decimal
    report_days: int
    tour_type: str
    tour: int | None
    last_date_eod: date | None


def _category_sums(
    entries: Iterable[NonCaseEntry],
    classifier: CodeClassifier,
) -> dict[Category, Decimal]:
    sums = {category: Decimal("0") for category in Category}
    for entry in entries:
        hours = entry.hours or Decimal("0")
        for category in classifier.memberships(entry.time_code):
            sums[category] += hours
    return sums


def count_report_days(
    non_case_entries: Iterable[NonCaseEntry],
    case_entries: Iterable[CaseEntry],
    excluded_codes: frozenset[str],
) -> int:
    """Distinct qualifying dates, never counting one date twice."""
    non_case_entries = tuple(non_case_entries)
    any_non_case_dates = {e.report_date for e in non_case_entries}
    counted_non_case_dates = {
        e.report_date for e in non_case_entries if e.time_code not in excluded_codes
    }
    case_only_dates = {
        e.report_date for e in case_entries if e.report_date not in any_non_case_dates
    }
    return len(counted_non_case_dates) + len(case_only_dates)


@traced_engine("weekly_summary", "1.0", fingerprint_fields=("employee", "window"))
def summarize_week(
    *,
    employee: EmployeeInfo,
    window: WeekWindow,
    non_case_entries: Sequence[NonCaseEntry],
    case_entries: Sequence[CaseEntry],
    classifier: CodeClassifier,
    rules: SummaryRules | None = None,
) -> WeeklySummary:
    """
    Summarize one employee's week.

    Preconditions:
        Every entry belongs to ``employee`` and falls inside ``window``.

    Postconditions:
        An employee with no records gets all-zero amounts, report_days 0
        and last_date_eod None.
    """
    rules = rules or SummaryRules()
    for entry in (*non_case_entries, *case_entries):
        if not window.contains(entry.report_date):
            raise ValueError(
                f"Record dated {entry.report_date} outside week "
                f"{window.start_date}..{window.end_date}"
            )

    sums = _category_sums(non_case_entries, classifier)
    case_total = sum((e.hours or Decimal("0") for e in case_entries), Decimal("0"))

    tour = sums[Category.TOUR]
    adjustment = sums[Category.ADJUSTMENT]
    schedule = sums[Category.SCHEDULE]

    dates = [e.report_date for e in non_case_entries] + [e.report_date for e in case_entries]

    summary = WeeklySummary(
        employee_id=employee.employee_id,
        employee_name=employee.name,
        tour_of_duty=quantize_hours(tour + case_total - adjustment - schedule),
        adjusted_tour=quantize_hours(adjustment - schedule),
        hours_worked=quantize_hours(case_total),
        case_direct_time=quantize_hours(case_total),
        code_direct_time=quantize_hours(sums[Category.CODE_DIRECT]),
        overhead_time=quantize_hours(sums[Category.OVERHEAD]),
        report_days=count_report_days(
            non_case_entries, case_entries, rules.report_day_excluded_codes
        ),
        tour_type=employee.tour_type.label,
        tour=employee.tour,
        last_date_eod=max(dates) if dates else None,
    )

    logger.debug(
        "weekly_summary_computed",
        extra={
            "employee_id": employee.employee_id,
            "non_case_count": len(non_case_entries),
            "case_count": len(case_entries),
            "report_days": summary.report_days,
        },
    )
    return summary


def order_summaries(summaries: Iterable[WeeklySummary]) -> list[WeeklySummary]:
    """Employee id ascending, then numeric tour ascending with nulls last."""
    return sorted(
        summaries,
        key=lambda s: (s.employee_id, s.tour is None, s.tour if s.tour is not None else 0),
    )

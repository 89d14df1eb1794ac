"""
Non-Case Breakdown Aggregator (``timeverify_engines.noncase_breakdown``).

Responsibility
--------------
Build the per-time-code drill-down table for one employee and week.  Each
row carries a display name (truncated), a display category (T, A or I), a
SUN..SAT day vector and its total.

Two rules change the day values:

* The presence-indicator code (760) does not carry hours.  Its value for a
  day is 1 when nothing was recorded that day and 0 otherwise, across all
  seven days of the window.
* Codes with an ADJUSTMENT letter are negated for display.  The presence
  rule is applied first.  The weekly summary reads the raw, un-negated
  hours and is unaffected.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.

Invariants enforced
-------------------
* For every row, the seven day values sum to the total.
* Rows whose total is exactly zero are dropped; negative totals are kept.
* Rows are sorted by display name; equal names keep ascending code order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from itertools import groupby
from operator import attrgetter

from timeverify_engines.classifier import CodeClassifier
from timeverify_engines.rules import BreakdownRules
from timeverify_engines.tracer import traced_engine
from timeverify_engines.week import DayVector, WeekWindow, fold_day_vector
from timeverify_kernel.domain.dtos import NonCaseEntry
from timeverify_kernel.domain.values import DisplayCategory, day_key


@dataclass(frozen=True)
class NonCaseBreakdownRow:
    """Display hours for one time code during the week."""

    time_code: str
    display_name: str
    display_category: DisplayCategory
    days: DayVector

    @property
    def total(self) -> Decimal:
        return self.days.total


def display_name_for(code: str, classifier: CodeClassifier, limit: int) -> str:
    """Active code's name, else the code itself, cut to ``limit`` characters."""
    info = classifier.active_info(code)
    name = info.name if info is not None and info.name is not None else code
    return name[:limit]


def presence_indicator(window: WeekWindow, by_day: dict[str, Decimal]) -> dict[str, Decimal]:
    """1 for each window day with no recorded hours, 0 otherwise."""
    result: dict[str, Decimal] = {}
    for d in window.days():
        key = day_key(d)
        hours = by_day.get(key)
        result[key] = Decimal("1") if hours is None or hours == 0 else Decimal("0")
    return result


@traced_engine("noncase_breakdown", "1.0", fingerprint_fields=("window", "entries"))
def build_noncase_breakdown(
    *,
    window: WeekWindow,
    entries: Sequence[NonCaseEntry],
    classifier: CodeClassifier,
    rules: BreakdownRules | None = None,
) -> tuple[NonCaseBreakdownRow, ...]:
    rules = rules or BreakdownRules()
    by_code = sorted(entries, key=attrgetter("time_code"))

    rows: list[NonCaseBreakdownRow] = []
    for code, group in groupby(by_code, key=attrgetter("time_code")):
        by_day = fold_day_vector(window, ((e.report_date, e.hours) for e in group))
        if code == rules.presence_indicator_code:
            by_day = presence_indicator(window, by_day)
        if classifier.is_adjustment_letter(code):
            by_day = {key: -value if value else value for key, value in by_day.items()}

        days = DayVector.from_mapping(by_day)
        if days.total == 0:
            continue
        rows.append(
            NonCaseBreakdownRow(
                time_code=code,
                display_name=display_name_for(code, classifier, rules.name_limit),
                display_category=classifier.display_category(code),
                days=days,
            )
        )

    # Stable: rows are already in code order
    rows.sort(key=attrgetter("display_name"))
    return tuple(rows)

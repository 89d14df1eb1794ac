"""
Case Breakdown Aggregator (``timeverify_engines.case_breakdown``).

Responsibility
--------------
Build the per-case drill-down table for one employee and week: one row per
case key with a SUN..SAT day vector and a total, labelled with the case's
display TIN and taxpayer name.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.  Display info is
passed in as a mapping already fetched in one batch by the caller.

Invariants enforced
-------------------
* For every row, the seven day values sum to the total.
* Rows whose total is not positive are dropped.
* Rows are sorted by display TIN (string order), then case key.
* A case without display info still appears, labelled with its key and
  the configured placeholder name.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from itertools import groupby
from operator import attrgetter

from timeverify_engines.rules import BreakdownRules
from timeverify_engines.tracer import traced_engine
from timeverify_engines.week import DayVector, WeekWindow, fold_day_vector
from timeverify_kernel.domain.dtos import CaseDisplayInfo, CaseEntry


@dataclass(frozen=True)
class CaseBreakdownRow:
    """Hours charged to one case during the week."""

    case_id: int
    display_tin: str
    display_name: str
    days: DayVector

    @property
    def total(self) -> Decimal:
        return self.days.total


@traced_engine("case_breakdown", "1.0", fingerprint_fields=("window", "entries"))
def build_case_breakdown(
    *,
    window: WeekWindow,
    entries: Sequence[CaseEntry],
    display: Mapping[int, CaseDisplayInfo],
    rules: BreakdownRules | None = None,
) -> tuple[CaseBreakdownRow, ...]:
    rules = rules or BreakdownRules()
    by_case = sorted(entries, key=attrgetter("case_id"))

    rows: list[CaseBreakdownRow] = []
    for case_id, group in groupby(by_case, key=attrgetter("case_id")):
        days = DayVector.from_mapping(
            fold_day_vector(window, ((e.report_date, e.hours) for e in group))
        )
        if days.total <= 0:
            continue
        info = display.get(case_id)
        rows.append(
            CaseBreakdownRow(
                case_id=case_id,
                display_tin=info.display_tin if info is not None else str(case_id),
                display_name=info.display_name if info is not None else rules.unknown_case_name,
                days=days,
            )
        )

    rows.sort(key=lambda r: (r.display_tin, r.case_id))
    return tuple(rows)

"""
Week window and day vectors (``timeverify_engines.week``).

Responsibility
--------------
* ``WeekWindow`` -- a validated seven-day reporting window.
* ``DayVector`` -- seven SUN..SAT hour values plus their total, built as an
  immutable fold: hours are accumulated into a plain dict keyed by day and
  the total is computed once.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.

Failure modes
-------------
* ``WeekWindow.of`` raises ``InvalidWeekWindowError`` for reversed bounds or
  a window that is not exactly seven days.
* ``fold_day_vector`` raises ``ValueError`` for a date outside the window
  (a programming error: selectors fetch by the same bounds).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from timeverify_kernel.domain.values import DAY_KEYS, ZERO_HOURS, day_key, quantize_hours
from timeverify_kernel.exceptions import InvalidWeekWindowError

WEEK_DAYS = 7


@dataclass(frozen=True)
class WeekWindow:
    """Inclusive seven-day window."""

    start_date: date
    end_date: date

    @classmethod
    def of(cls, start_date: date, end_date: date) -> WeekWindow:
        if end_date < start_date:
            raise InvalidWeekWindowError(
                start_date.isoformat(), end_date.isoformat(), "end date precedes start date"
            )
        span = (end_date - start_date).days + 1
        if span != WEEK_DAYS:
            raise InvalidWeekWindowError(
                start_date.isoformat(),
                end_date.isoformat(),
                f"window spans {span} days, expected {WEEK_DAYS}",
            )
        return cls(start_date=start_date, end_date=end_date)

    def days(self) -> tuple[date, ...]:
        return tuple(self.start_date + timedelta(days=i) for i in range(WEEK_DAYS))

    def contains(self, d: date) -> bool:
        return self.start_date <= d <= self.end_date


@dataclass(frozen=True)
class DayVector:
    """Hours per SUN..SAT day key and their total."""

    hours: tuple[tuple[str, Decimal], ...]
    total: Decimal

    def __getitem__(self, key: str) -> Decimal:
        return dict(self.hours)[key]

    def as_dict(self) -> dict[str, Decimal]:
        return dict(self.hours)

    @classmethod
    def from_mapping(cls, by_day: Mapping[str, Decimal]) -> DayVector:
        """Freeze a day map; missing days are zero, the total is computed once."""
        values = tuple((key, quantize_hours(by_day.get(key, ZERO_HOURS))) for key in DAY_KEYS)
        total = quantize_hours(sum((v for _, v in values), Decimal("0")))
        return cls(hours=values, total=total)


def fold_day_vector(
    window: WeekWindow,
    entries: Iterable[tuple[date, Decimal | None]],
) -> dict[str, Decimal]:
    """Sum (date, hours) pairs into a SUN..SAT map.  None hours count as zero."""
    by_day: dict[str, Decimal] = {}
    for report_date, hours in entries:
        if not window.contains(report_date):
            raise ValueError(f"{report_date} is outside {window.start_date}..{window.end_date}")
        key = day_key(report_date)
        by_day[key] = by_day.get(key, Decimal("0")) + (hours or Decimal("0"))
    return by_day

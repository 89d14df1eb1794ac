"""
Fiscal Calendar Generator (``timeverify_engines.calendar``).

Responsibility
--------------
Derive a fiscal year's twelve months and their posting cycles from the year
number, and render the calendar views built on them:

* ``generate_fiscal_year`` -- OCT..SEP months, 4 or 5 weeks each (52 in
  total), contiguous, cycle numbers starting at ``year * 100 + 1``.
* ``derive_posting_cycles`` -- the weeks of one month, derived on read.
* ``build_fiscal_year_view`` -- labels and totals for a persisted year.
* Pay-period helpers: ``week_start_for``, ``build_pay_period``,
  ``build_reporting_month``.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO clock reads.
Month order and week-count rule are injected through ``CalendarRules``.

Invariants enforced
-------------------
* ``month[i + 1].start_date == month[i].end_date + 1 day``.
* ``end_date == start_date + weeks * 7 - 1`` and
  ``end_cycle == start_cycle + weeks - 1`` for generated months.
* The default anchor is the Sunday on or before October 1 of ``year - 1``.
* Every derived posting cycle has workdays 5; holidays are not modeled.

Failure modes
-------------
* ``FiscalYearOutOfRangeError`` for a year outside the configured bounds.
* ``InvalidMonthTokenError`` for a token that is not MMMYYYY.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from timeverify_engines.rules import CalendarRules
from timeverify_engines.tracer import traced_engine
from timeverify_kernel.domain.dtos import FiscalMonthInfo
from timeverify_kernel.exceptions import FiscalYearOutOfRangeError, InvalidMonthTokenError

# Calendar order; index + 1 is the month number
MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)
MONTH_NAMES: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_TOKEN_RE = re.compile(r"^([A-Za-z]{3})(\d{4})$")


# ---------------------------------------------------------------------------
# Tokens and labels
# ---------------------------------------------------------------------------


def parse_month_token(month_token: str) -> tuple[str, int]:
    """Split "OCT2025" into ("OCT", 2025)."""
    match = _TOKEN_RE.match(month_token or "")
    if match is None:
        raise InvalidMonthTokenError(month_token)
    abbrev = match.group(1).upper()
    if abbrev not in MONTH_ABBREVIATIONS:
        raise InvalidMonthTokenError(month_token)
    return abbrev, int(match.group(2))


def fiscal_year_for_token(month_token: str, rules: CalendarRules | None = None) -> int:
    """OCT/NOV/DEC roll into the next fiscal year."""
    rules = rules or CalendarRules()
    abbrev, year = parse_month_token(month_token)
    return year + 1 if abbrev in rules.prior_year_months else year


def month_name(month_token: str) -> str:
    abbrev, _ = parse_month_token(month_token)
    return MONTH_NAMES[MONTH_ABBREVIATIONS.index(abbrev)]


def _short(d: date) -> str:
    return f"{MONTH_ABBREVIATIONS[d.month - 1].title()} {d.day}"


def _long(d: date) -> str:
    return f"{MONTH_NAMES[d.month - 1]} {d.day}"


def month_date_range_label(start: date, end: date) -> str:
    """Render e.g. "Sep 28 - Oct 25"."""
    return f"{_short(start)} - {_short(end)}"


def week_date_range_label(start: date, end: date) -> str:
    """Render e.g. "September 28 - October 4"."""
    return f"{_long(start)} - {_long(end)}"


def pay_period_label(start: date, end: date) -> str:
    """Render e.g. "09/28/2025 - 10/04/2025"."""
    return f"{start:%m/%d/%Y} - {end:%m/%d/%Y}"


def month_year_label(d: date) -> str:
    """Render e.g. "September 2025"."""
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"


def fiscal_year_label(fiscal_year: int) -> str:
    return f"FY {fiscal_year}"


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def week_start_for(d: date) -> date:
    """The Sunday on or before ``d``."""
    return d - timedelta(days=(d.weekday() + 1) % 7)


def default_anchor(fiscal_year: int, rules: CalendarRules | None = None) -> date:
    rules = rules or CalendarRules()
    return week_start_for(date(fiscal_year - 1, rules.anchor_month, rules.anchor_day))


def validate_fiscal_year(fiscal_year: int, rules: CalendarRules | None = None) -> None:
    rules = rules or CalendarRules()
    if not rules.min_year <= fiscal_year <= rules.max_year:
        raise FiscalYearOutOfRangeError(fiscal_year, rules.min_year, rules.max_year)


@traced_engine("calendar", "1.0", fingerprint_fields=("fiscal_year", "start_date"))
def generate_fiscal_year(
    *,
    fiscal_year: int,
    start_date: date | None = None,
    rules: CalendarRules | None = None,
) -> tuple[FiscalMonthInfo, ...]:
    """
    Generate the twelve months of ``fiscal_year``.

    Args:
        fiscal_year: Year in which the fiscal year's September falls.
        start_date: Explicit first-month start.  Defaults to the Sunday on
            or before October 1 of ``fiscal_year - 1``.
        rules: Calendar shape.
    """
    rules = rules or CalendarRules()
    validate_fiscal_year(fiscal_year, rules)

    month_start = start_date or default_anchor(fiscal_year, rules)
    cycle = fiscal_year * 100 + 1

    months: list[FiscalMonthInfo] = []
    for abbrev in rules.month_order:
        calendar_year = fiscal_year - 1 if abbrev in rules.prior_year_months else fiscal_year
        weeks = rules.week_count(abbrev)
        month_end = month_start + timedelta(days=weeks * 7 - 1)
        months.append(
            FiscalMonthInfo(
                month_token=f"{abbrev}{calendar_year}",
                fiscal_year=fiscal_year,
                start_date=month_start,
                end_date=month_end,
                weeks=weeks,
                start_cycle=cycle,
                end_cycle=cycle + weeks - 1,
                workdays=weeks * rules.workdays_per_week,
                holidays=0,
            )
        )
        cycle += weeks
        month_start = month_end + timedelta(days=1)

    return tuple(months)


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PostingCycle:
    """One Sunday..Saturday week of a fiscal month."""

    cycle_number: int
    start_date: date
    end_date: date
    workdays: int

    @property
    def date_range(self) -> str:
        return week_date_range_label(self.start_date, self.end_date)


@dataclass(frozen=True)
class FiscalMonthView:
    """A persisted month with its display labels and derived cycles."""

    month: FiscalMonthInfo
    month_name: str
    date_range: str
    cycles: tuple[PostingCycle, ...]

    @property
    def month_token(self) -> str:
        return self.month.month_token

    @property
    def hours(self) -> int:
        # Displayed as "hours"; equals workdays
        return self.month.workdays


@dataclass(frozen=True)
class FiscalYearView:
    """A fiscal year with totals."""

    fiscal_year: int
    display_label: str
    total_weeks: int
    total_workdays: int
    months: tuple[FiscalMonthView, ...]


def derive_posting_cycles(
    month: FiscalMonthInfo,
    rules: CalendarRules | None = None,
) -> tuple[PostingCycle, ...]:
    """Week i starts 7*i days after the month start and ends 6 days later."""
    rules = rules or CalendarRules()
    return tuple(
        PostingCycle(
            cycle_number=month.start_cycle + i,
            start_date=month.start_date + timedelta(days=7 * i),
            end_date=month.start_date + timedelta(days=7 * i + 6),
            workdays=rules.workdays_per_week,
        )
        for i in range(month.weeks)
    )


def build_month_view(
    month: FiscalMonthInfo,
    rules: CalendarRules | None = None,
) -> FiscalMonthView:
    return FiscalMonthView(
        month=month,
        month_name=month_name(month.month_token),
        date_range=month_date_range_label(month.start_date, month.end_date),
        cycles=derive_posting_cycles(month, rules),
    )


def build_fiscal_year_view(
    fiscal_year: int,
    months: Sequence[FiscalMonthInfo],
    rules: CalendarRules | None = None,
) -> FiscalYearView:
    ordered = sorted(months, key=lambda m: m.start_date)
    return FiscalYearView(
        fiscal_year=fiscal_year,
        display_label=fiscal_year_label(fiscal_year),
        total_weeks=sum(m.weeks for m in ordered),
        total_workdays=sum(m.workdays for m in ordered),
        months=tuple(build_month_view(m, rules) for m in ordered),
    )


# ---------------------------------------------------------------------------
# Pay periods and reporting months
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PayPeriod:
    """The Sunday..Saturday week containing a date."""

    start_date: date
    end_date: date
    reporting_month: str
    display_label: str


@dataclass(frozen=True)
class ReportingWeek:
    week_number: int
    posting_cycle: int
    start_date: date
    end_date: date
    display_label: str


@dataclass(frozen=True)
class ReportingMonth:
    month_token: str
    display_label: str
    start_date: date
    end_date: date
    fiscal_year: int
    week_count: int
    weeks: tuple[ReportingWeek, ...]


def reporting_month_label(week_start: date, month: FiscalMonthInfo | None) -> str:
    """Token of the month covering ``week_start``, else "<Month> <year>"."""
    return month.month_token if month is not None else month_year_label(week_start)


def build_pay_period(week_start: date, month: FiscalMonthInfo | None) -> PayPeriod:
    """
    Args:
        week_start: A Sunday (see week_start_for).
        month: Latest month starting on or before week_start, if any.
    """
    week_end = week_start + timedelta(days=6)
    return PayPeriod(
        start_date=week_start,
        end_date=week_end,
        reporting_month=reporting_month_label(week_start, month),
        display_label=pay_period_label(week_start, week_end),
    )


def reporting_weeks(month: FiscalMonthInfo) -> tuple[ReportingWeek, ...]:
    weeks = []
    for i in range(month.weeks):
        start = month.start_date + timedelta(days=7 * i)
        end = start + timedelta(days=6)
        weeks.append(
            ReportingWeek(
                week_number=i + 1,
                posting_cycle=month.start_cycle + i,
                start_date=start,
                end_date=end,
                display_label=pay_period_label(start, end),
            )
        )
    return tuple(weeks)


def build_reporting_month(month: FiscalMonthInfo) -> ReportingMonth:
    return ReportingMonth(
        month_token=month.month_token,
        display_label=month_year_label(month.start_date),
        start_date=month.start_date,
        end_date=month.end_date,
        fiscal_year=month.fiscal_year,
        week_count=month.weeks,
        weeks=reporting_weeks(month),
    )

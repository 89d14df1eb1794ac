"""
Engine rule sets (``timeverify_engines.rules``).

Responsibility
--------------
Immutable value objects that carry every constant the engines depend on:
classification letter sets, sentinel codes, display limits and calendar
shape.  Defaults reproduce the production values; ``timeverify_config``
builds instances from YAML through ``timeverify_config.bridges`` and tests
substitute their own.

Architecture position
---------------------
**Engines layer** -- pure data, zero I/O.  No config imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClassificationRules:
    """Letter sets that map a time code's letter to aggregation categories."""

    active_markers: frozenset[str] = frozenset({"Y", "C"})
    time_code_type: str = "T"
    tour_letters: frozenset[str] = frozenset("MUCGNROE")
    code_direct_letters: frozenset[str] = frozenset("GMCUNE")
    overhead_letters: frozenset[str] = frozenset("OR")
    adjustment_letters: frozenset[str] = frozenset("A")
    schedule_letters: frozenset[str] = frozenset("S")
    # Letters shown with the "I" display category
    info_display_letters: frozenset[str] = frozenset("I")


@dataclass(frozen=True)
class SummaryRules:
    """Weekly summary constants."""

    # Non-case codes whose dates never count as report days
    report_day_excluded_codes: frozenset[str] = frozenset({"750", "760"})


@dataclass(frozen=True)
class BreakdownRules:
    """Drill-down table constants."""

    name_limit: int = 12
    # Code whose day value is 1 when nothing was recorded, 0 otherwise
    presence_indicator_code: str = "760"
    unknown_case_name: str = "Unknown"


@dataclass(frozen=True)
class CalendarRules:
    """Fiscal calendar shape."""

    month_order: tuple[str, ...] = (
        "OCT", "NOV", "DEC", "JAN", "FEB", "MAR",
        "APR", "MAY", "JUN", "JUL", "AUG", "SEP",
    )
    # Months that fall in calendar year (fiscal year - 1)
    prior_year_months: frozenset[str] = frozenset({"OCT", "NOV", "DEC"})
    five_week_months: frozenset[str] = frozenset({"MAR", "JUN", "SEP", "DEC"})
    default_week_count: int = 4
    workdays_per_week: int = 5
    # Month/day the default anchor snaps back from, in calendar year - 1
    anchor_month: int = 10
    anchor_day: int = 1
    min_year: int = 2000
    max_year: int = 2100
    allowed_week_counts: frozenset[int] = field(default_factory=lambda: frozenset({4, 5}))
    workdays_range: tuple[int, int] = (1, 31)

    def week_count(self, month_abbrev: str) -> int:
        return 5 if month_abbrev in self.five_week_months else self.default_week_count

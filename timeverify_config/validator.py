"""
Configuration Validator (``timeverify_config.validator``).

Responsibility
--------------
Checks a parsed ``EngineConfig`` for structural consistency before any
engine sees it.

Invariants enforced
-------------------
* ADJUSTMENT, SCHEDULE and INFO display letters are pairwise disjoint and
  disjoint from TOUR.
* CODE_DIRECT and OVERHEAD are disjoint subsets of TOUR.
* Month order names twelve distinct known months; prior-year and five-week
  months are drawn from it.
* Week counts over the month order sum to 52, and every count used by the
  generator is an allowed patch value.
* Year, workday and employee-id bounds are ordered.

Failure modes
-------------
* Errors are collected in ``ConfigValidationResult``; the caller refuses
  to return an invalid configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from timeverify_config.schema import EngineConfig

_KNOWN_MONTHS = frozenset(
    {"JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"}
)
WEEKS_PER_YEAR = 52


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    Each error is a (section, message) pair.
    """

    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, section: str, msg: str) -> None:
        self.errors.append((section, msg))


def validate_engine_config(config: EngineConfig) -> ConfigValidationResult:
    result = ConfigValidationResult()
    _validate_classification(config, result)
    _validate_calendar(config, result)
    _validate_display(config, result)
    _validate_eligibility(config, result)
    return result


def _validate_classification(config: EngineConfig, result: ConfigValidationResult) -> None:
    c = config.classification
    tour = set(c.tour)
    exclusive = {
        "adjustment": set(c.adjustment),
        "schedule": set(c.schedule),
        "info_display": set(c.info_display),
    }
    names = sorted(exclusive)
    for i, a in enumerate(names):
        if exclusive[a] & tour:
            result.add_error("classification", f"{a} letters overlap tour letters")
        for b in names[i + 1:]:
            if exclusive[a] & exclusive[b]:
                result.add_error("classification", f"{a} and {b} letters overlap")
    if not set(c.code_direct) <= tour:
        result.add_error("classification", "code_direct letters must be tour letters")
    if not set(c.overhead) <= tour:
        result.add_error("classification", "overhead letters must be tour letters")
    if set(c.code_direct) & set(c.overhead):
        result.add_error("classification", "code_direct and overhead letters overlap")
    if not c.active_markers:
        result.add_error("classification", "active_markers is empty")


def _validate_calendar(config: EngineConfig, result: ConfigValidationResult) -> None:
    cal = config.calendar
    order = cal.month_order
    if len(order) != 12 or len(set(order)) != 12:
        result.add_error("calendar", "month_order must name 12 distinct months")
    unknown = set(order) - _KNOWN_MONTHS
    if unknown:
        result.add_error("calendar", f"unknown months in month_order: {sorted(unknown)}")
    for name in ("prior_year_months", "five_week_months"):
        stray = set(getattr(cal, name)) - set(order)
        if stray:
            result.add_error("calendar", f"{name} not in month_order: {sorted(stray)}")

    counts = [5 if m in cal.five_week_months else cal.default_week_count for m in order]
    if sum(counts) != WEEKS_PER_YEAR:
        result.add_error(
            "calendar", f"week counts sum to {sum(counts)}, expected {WEEKS_PER_YEAR}"
        )
    unused = set(counts) - set(cal.allowed_week_counts)
    if unused:
        result.add_error(
            "calendar", f"generated week counts {sorted(unused)} are not allowed_week_counts"
        )
    if cal.min_year > cal.max_year:
        result.add_error("calendar", "year_bounds min exceeds max")
    if cal.workdays_min > cal.workdays_max:
        result.add_error("calendar", "workdays_bounds min exceeds max")
    if not 1 <= cal.anchor_month <= 12 or not 1 <= cal.anchor_day <= 28:
        result.add_error("calendar", "default_anchor must be a valid month and day 1..28")


def _validate_display(config: EngineConfig, result: ConfigValidationResult) -> None:
    if config.display.name_limit < 1:
        result.add_error("display", "name_limit must be positive")


def _validate_eligibility(config: EngineConfig, result: ConfigValidationResult) -> None:
    e = config.eligibility
    if e.min_employee_id > e.max_employee_id:
        result.add_error("eligibility", "employee_id_range min exceeds max")

"""
Config -> Engine/Kernel Bridges.

Functions that convert an ``EngineConfig`` into the rule objects consumed by
``timeverify_engines`` and ``timeverify_kernel``.  These live in
timeverify_config (the producer) because neither the engines nor the kernel
may import timeverify_config.

Usage:
    from timeverify_config import get_active_config
    from timeverify_config.bridges import build_classification_rules

    config = get_active_config()
    classifier = CodeClassifier(codes, build_classification_rules(config))
"""

from __future__ import annotations

from timeverify_config.schema import EngineConfig
from timeverify_engines.rules import (
    BreakdownRules,
    CalendarRules,
    ClassificationRules,
    SummaryRules,
)
from timeverify_kernel.domain.eligibility import EligibilityRule


def build_classification_rules(config: EngineConfig) -> ClassificationRules:
    c = config.classification
    return ClassificationRules(
        active_markers=frozenset(c.active_markers),
        time_code_type=c.time_code_type,
        tour_letters=frozenset(c.tour),
        code_direct_letters=frozenset(c.code_direct),
        overhead_letters=frozenset(c.overhead),
        adjustment_letters=frozenset(c.adjustment),
        schedule_letters=frozenset(c.schedule),
        info_display_letters=frozenset(c.info_display),
    )


def build_summary_rules(config: EngineConfig) -> SummaryRules:
    return SummaryRules(
        report_day_excluded_codes=frozenset(config.sentinels.report_day_excluded_codes),
    )


def build_breakdown_rules(config: EngineConfig) -> BreakdownRules:
    return BreakdownRules(
        name_limit=config.display.name_limit,
        presence_indicator_code=config.sentinels.presence_indicator_code,
        unknown_case_name=config.display.unknown_case_name,
    )


def build_calendar_rules(config: EngineConfig) -> CalendarRules:
    cal = config.calendar
    return CalendarRules(
        month_order=cal.month_order,
        prior_year_months=frozenset(cal.prior_year_months),
        five_week_months=frozenset(cal.five_week_months),
        default_week_count=cal.default_week_count,
        workdays_per_week=cal.workdays_per_week,
        anchor_month=cal.anchor_month,
        anchor_day=cal.anchor_day,
        min_year=cal.min_year,
        max_year=cal.max_year,
        allowed_week_counts=frozenset(cal.allowed_week_counts),
        workdays_range=(cal.workdays_min, cal.workdays_max),
    )


def build_eligibility_rule(config: EngineConfig) -> EligibilityRule:
    e = config.eligibility
    return EligibilityRule(
        active_markers=frozenset(e.active_markers),
        employee_types=frozenset(e.employee_types),
        excluded_position_types=frozenset(e.excluded_position_types),
        unconditional_types=frozenset(e.unconditional_types),
        min_employee_id=e.min_employee_id,
        max_employee_id=e.max_employee_id,
    )

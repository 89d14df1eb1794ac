"""
Module: timeverify_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    classification, aggregation and calendar engines.  This is the canonical
    import surface for ``timeverify_services``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import timeverify_kernel.domain, timeverify_kernel.exceptions
    and timeverify_kernel.logging_config (and sibling engine modules).
    MUST NOT import timeverify_services or timeverify_config.

Invariants enforced:
    - Purity: engines never read the wall clock; dates are parameters.
    - Decimal-only arithmetic for hours.
    - Determinism: identical inputs always produce identical outputs.

Failure modes:
    - Typed kernel errors for invalid windows, tokens and years.
    - ValueError for programming errors (records outside the window).

Audit relevance:
    Aggregation and generation calls are traced via ``@traced_engine``
    (see ``timeverify_engines.tracer``), emitting TIMEVERIFY_ENGINE_TRACE
    records with engine name, version, input fingerprint and duration.

Usage:
    from timeverify_engines import CodeClassifier, WeekWindow, summarize_week
    from timeverify_engines import generate_fiscal_year
"""

from timeverify_kernel.logging_config import get_logger

logger = get_logger("engines")

from timeverify_engines.calendar import (
    FiscalMonthView,
    FiscalYearView,
    PayPeriod,
    PostingCycle,
    ReportingMonth,
    ReportingWeek,
    build_fiscal_year_view,
    build_month_view,
    build_pay_period,
    build_reporting_month,
    default_anchor,
    derive_posting_cycles,
    fiscal_year_for_token,
    generate_fiscal_year,
    parse_month_token,
    reporting_month_label,
    reporting_weeks,
    validate_fiscal_year,
    week_start_for,
)
from timeverify_engines.case_breakdown import CaseBreakdownRow, build_case_breakdown
from timeverify_engines.classifier import CodeClassifier
from timeverify_engines.noncase_breakdown import (
    NonCaseBreakdownRow,
    build_noncase_breakdown,
)
from timeverify_engines.rules import (
    BreakdownRules,
    CalendarRules,
    ClassificationRules,
    SummaryRules,
)
from timeverify_engines.tracer import compute_input_fingerprint, traced_engine
from timeverify_engines.week import DayVector, WeekWindow, fold_day_vector
from timeverify_engines.weekly_summary import (
    WeeklySummary,
    count_report_days,
    order_summaries,
    summarize_week,
)

__all__ = [
    # Rules
    "BreakdownRules",
    "CalendarRules",
    "ClassificationRules",
    "SummaryRules",
    # Classification
    "CodeClassifier",
    # Week
    "DayVector",
    "WeekWindow",
    "fold_day_vector",
    # Weekly summary
    "WeeklySummary",
    "count_report_days",
    "order_summaries",
    "summarize_week",
    # Breakdowns
    "CaseBreakdownRow",
    "NonCaseBreakdownRow",
    "build_case_breakdown",
    "build_noncase_breakdown",
    # Calendar
    "FiscalMonthView",
    "FiscalYearView",
    "PayPeriod",
    "PostingCycle",
    "ReportingMonth",
    "ReportingWeek",
    "build_fiscal_year_view",
    "build_month_view",
    "build_pay_period",
    "build_reporting_month",
    "default_anchor",
    "derive_posting_cycles",
    "fiscal_year_for_token",
    "generate_fiscal_year",
    "parse_month_token",
    "reporting_month_label",
    "reporting_weeks",
    "validate_fiscal_year",
    "week_start_for",
    # Tracing
    "compute_input_fingerprint",
    "traced_engine",
]

"""
Engine configuration schema.

Defines the typed, frozen form of ``defaults.yaml`` (or a substitute file).
The loader parses YAML into these types; ``timeverify_config.bridges``
turns them into the rule objects the engines and the kernel consume.

Sections:
  classification -- active markers, time-code type, letter sets
  sentinels      -- report-day exclusions, presence-indicator code
  display        -- name truncation, unknown case placeholder
  calendar       -- month order, five-week months, year bounds, patch bounds
  eligibility    -- verification filter
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassificationConfig:
    """Letter sets by aggregation category."""

    active_markers: tuple[str, ...]
    time_code_type: str
    tour: tuple[str, ...]
    code_direct: tuple[str, ...]
    overhead: tuple[str, ...]
    adjustment: tuple[str, ...]
    schedule: tuple[str, ...]
    info_display: tuple[str, ...]


@dataclass(frozen=True)
class SentinelConfig:
    report_day_excluded_codes: tuple[str, ...]
    presence_indicator_code: str


@dataclass(frozen=True)
class DisplayConfig:
    name_limit: int
    unknown_case_name: str


@dataclass(frozen=True)
class CalendarConfig:
    """Fiscal calendar shape and mutation bounds."""

    month_order: tuple[str, ...]
    prior_year_months: tuple[str, ...]
    five_week_months: tuple[str, ...]
    default_week_count: int
    workdays_per_week: int
    anchor_month: int
    anchor_day: int
    min_year: int
    max_year: int
    allowed_week_counts: tuple[int, ...]
    workdays_min: int
    workdays_max: int
    protect_years_with_time_records: bool = True


@dataclass(frozen=True)
class EligibilityConfig:
    """Which employees appear in weekly verification."""

    active_markers: tuple[str, ...]
    employee_types: tuple[str, ...]
    excluded_position_types: tuple[str, ...]
    unconditional_types: tuple[str, ...]
    min_employee_id: int
    max_employee_id: int


@dataclass(frozen=True)
class EngineConfig:
    """The complete runtime configuration."""

    config_id: str
    version: int
    classification: ClassificationConfig
    sentinels: SentinelConfig
    display: DisplayConfig
    calendar: CalendarConfig
    eligibility: EligibilityConfig
    checksum: str = ""

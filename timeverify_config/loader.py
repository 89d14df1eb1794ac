"""
Configuration Loader (``timeverify_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen
``timeverify_config.schema`` dataclasses.  The single public entry point for
runtime config is ``timeverify_config.get_active_config()``.

Invariants enforced
-------------------
* Required keys are required: a missing key raises ``KeyError``; there are
  no silent defaults except ``calendar.protect_years_with_time_records``.
* Letter and code lists are normalized to upper-case tuples.
* ``compute_checksum`` is a deterministic SHA-256 over canonical JSON.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from timeverify_config.schema import (
    CalendarConfig,
    ClassificationConfig,
    DisplayConfig,
    EligibilityConfig,
    EngineConfig,
    SentinelConfig,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _letters(value: Any) -> tuple[str, ...]:
    """Accept "MUCG" or ["M", "U", ...]; return upper-case letters."""
    if isinstance(value, str):
        return tuple(ch.upper() for ch in value if not ch.isspace())
    return tuple(str(v).upper() for v in value)


def _codes(value: Any) -> tuple[str, ...]:
    return tuple(str(v) for v in value)


def parse_classification(data: dict[str, Any]) -> ClassificationConfig:
    letter_sets = data["letter_sets"]
    return ClassificationConfig(
        active_markers=_letters(data["active_markers"]),
        time_code_type=str(data["time_code_type"]).upper(),
        tour=_letters(letter_sets["tour"]),
        code_direct=_letters(letter_sets["code_direct"]),
        overhead=_letters(letter_sets["overhead"]),
        adjustment=_letters(letter_sets["adjustment"]),
        schedule=_letters(letter_sets["schedule"]),
        info_display=_letters(letter_sets["info_display"]),
    )


def parse_sentinels(data: dict[str, Any]) -> SentinelConfig:
    return SentinelConfig(
        report_day_excluded_codes=_codes(data["report_day_excluded_codes"]),
        presence_indicator_code=str(data["presence_indicator_code"]),
    )


def parse_display(data: dict[str, Any]) -> DisplayConfig:
    return DisplayConfig(
        name_limit=int(data["name_limit"]),
        unknown_case_name=str(data["unknown_case_name"]),
    )


def parse_calendar(data: dict[str, Any]) -> CalendarConfig:
    anchor = data["default_anchor"]
    return CalendarConfig(
        month_order=_codes(v.upper() for v in data["month_order"]),
        prior_year_months=_codes(v.upper() for v in data["prior_year_months"]),
        five_week_months=_codes(v.upper() for v in data["five_week_months"]),
        default_week_count=int(data["default_week_count"]),
        workdays_per_week=int(data["workdays_per_week"]),
        anchor_month=int(anchor["month"]),
        anchor_day=int(anchor["day"]),
        min_year=int(data["year_bounds"]["min"]),
        max_year=int(data["year_bounds"]["max"]),
        allowed_week_counts=tuple(int(v) for v in data["allowed_week_counts"]),
        workdays_min=int(data["workdays_bounds"]["min"]),
        workdays_max=int(data["workdays_bounds"]["max"]),
        protect_years_with_time_records=bool(
            data.get("protect_years_with_time_records", True)
        ),
    )


def parse_eligibility(data: dict[str, Any]) -> EligibilityConfig:
    return EligibilityConfig(
        active_markers=_letters(data["active_markers"]),
        employee_types=_letters(data["employee_types"]),
        excluded_position_types=_letters(data["excluded_position_types"]),
        unconditional_types=_letters(data["unconditional_types"]),
        min_employee_id=int(data["employee_id_range"]["min"]),
        max_employee_id=int(data["employee_id_range"]["max"]),
    )


def parse_engine_config(data: dict[str, Any]) -> EngineConfig:
    """
    Parse the full configuration document.

    Postconditions:
        - ``checksum`` is the SHA-256 of ``data``.
    """
    return EngineConfig(
        config_id=str(data["config_id"]),
        version=int(data["version"]),
        classification=parse_classification(data["classification"]),
        sentinels=parse_sentinels(data["sentinels"]),
        display=parse_display(data["display"]),
        calendar=parse_calendar(data["calendar"]),
        eligibility=parse_eligibility(data["eligibility"]),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()

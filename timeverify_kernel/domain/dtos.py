"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Immutable records that cross the persistence boundary: reference data
    (time codes, employees, case display info), the two sources of reported
    time, and fiscal months with their patches.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    from_model() class methods are boundary converters invoked only by
    selectors and kernel services; engines never see ORM rows.

Invariants enforced:
    - All DTOs are frozen.
    - Hours stay Decimal (or None when the source column is NULL).
    - FiscalMonthPatch carries only the fields a caller supplied.

Failure modes:
    - InvalidMonthPatchError from FiscalMonthPatch.from_mapping on an unknown
      field or a value of the wrong type.

Data flow:
    ORM row -> selector -> DTO -> engine -> result dataclass -> service
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from timeverify_kernel.domain.values import (
    TourType,
    format_tin,
    taxpayer_display_name,
)
from timeverify_kernel.exceptions import InvalidMonthPatchError

if TYPE_CHECKING:
    from timeverify_kernel.models.case_file import CaseFile
    from timeverify_kernel.models.employee import Employee
    from timeverify_kernel.models.fiscal_month import FiscalMonth
    from timeverify_kernel.models.time_code import TimeCode
    from timeverify_kernel.models.time_record import (
        CaseTimeRecord,
        NonCaseTimeRecord,
    )


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeCodeInfo:
    """A time code and its classification letter."""

    code: str
    code_type: str
    name: str | None
    active: str | None
    letter: str | None

    @classmethod
    def from_model(cls, model: TimeCode) -> TimeCodeInfo:
        return cls(
            code=model.code,
            code_type=model.code_type,
            name=model.name,
            active=model.active,
            letter=model.time_definition,
        )


@dataclass(frozen=True)
class EmployeeInfo:
    """Employee attributes needed for eligibility and summary pass-through."""

    employee_id: int
    name: str | None
    tour: int | None = None
    employee_type: str | None = None
    position_type: str | None = None
    active: str | None = None

    @property
    def tour_type(self) -> TourType:
        return TourType.from_code(self.tour)

    @classmethod
    def from_model(cls, model: Employee) -> EmployeeInfo:
        return cls(
            employee_id=model.employee_id,
            name=model.name,
            tour=model.tour,
            employee_type=model.employee_type,
            position_type=model.position_type,
            active=model.active,
        )


@dataclass(frozen=True)
class CaseDisplayInfo:
    """Display TIN and taxpayer name for one case key."""

    case_id: int
    display_tin: str
    display_name: str

    @classmethod
    def from_model(cls, model: CaseFile) -> CaseDisplayInfo:
        return cls(
            case_id=model.case_id,
            display_tin=format_tin(model.tin, model.tin_type),
            display_name=taxpayer_display_name(model.taxpayer_name, model.name_control),
        )


# ---------------------------------------------------------------------------
# Reported time
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NonCaseEntry:
    """Hours reported against a time code on one date."""

    employee_id: int
    report_date: date
    time_code: str
    hours: Decimal | None

    @classmethod
    def from_model(cls, model: NonCaseTimeRecord) -> NonCaseEntry:
        return cls(
            employee_id=model.employee_id,
            report_date=model.report_date,
            time_code=model.time_code,
            hours=model.hours,
        )


@dataclass(frozen=True)
class CaseEntry:
    """Hours reported against a case on one date."""

    employee_id: int
    report_date: date
    case_id: int
    hours: Decimal | None

    @classmethod
    def from_model(cls, model: CaseTimeRecord) -> CaseEntry:
        return cls(
            employee_id=model.employee_id,
            report_date=model.report_date,
            case_id=model.case_id,
            hours=model.hours,
        )


# ---------------------------------------------------------------------------
# Fiscal calendar
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FiscalMonthInfo:
    """
    One persisted fiscal month.

    Also used for generated months before they are written; the calendar
    engine produces these and CalendarService persists them unchanged.
    """

    month_token: str
    fiscal_year: int
    start_date: date
    end_date: date
    weeks: int
    start_cycle: int
    end_cycle: int
    workdays: int
    holidays: int = 0

    @classmethod
    def from_model(cls, model: FiscalMonth) -> FiscalMonthInfo:
        return cls(
            month_token=model.month_token,
            fiscal_year=model.fiscal_year,
            start_date=model.start_date,
            end_date=model.end_date,
            weeks=model.weeks,
            start_cycle=model.start_cycle,
            end_cycle=model.end_cycle,
            workdays=model.workdays,
            holidays=model.holidays,
        )


@dataclass(frozen=True)
class FiscalMonthPatch:
    """
    Partial update of one fiscal month.

    Contract:
        A field left as None is not touched.  month_token is only required
        for bulk updates, where it selects the row.
    """

    month_token: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    weeks: int | None = None
    start_cycle: int | None = None
    end_cycle: int | None = None
    workdays: int | None = None

    def changes(self) -> dict[str, Any]:
        """Supplied field values, excluding month_token."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "month_token" and getattr(self, f.name) is not None
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FiscalMonthPatch:
        """
        Build a patch from loosely typed input such as a decoded JSON body.

        Dates may be ``date`` objects or ISO strings; counts must be ints.
        None leaves a field unset.

        Raises:
            InvalidMonthPatchError: Unknown field, or a value of the wrong type.
        """
        token = data.get("month_token")
        label = token if isinstance(token, str) and token else "?"

        allowed = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise InvalidMonthPatchError(label, unknown[0], "unknown field")

        values: dict[str, Any] = {}
        for name, value in data.items():
            if value is None:
                continue
            if name == "month_token":
                if not isinstance(value, str):
                    raise InvalidMonthPatchError(label, name, "must be a string")
                values[name] = value.upper()
            elif name in _PATCH_DATE_FIELDS:
                values[name] = _coerce_date(label, name, value)
            else:
                # bool is an int subclass
                if isinstance(value, bool) or not isinstance(value, int):
                    raise InvalidMonthPatchError(label, name, "must be an integer")
                values[name] = value
        return cls(**values)


_PATCH_DATE_FIELDS = frozenset({"start_date", "end_date"})


def _coerce_date(label: str, name: str, value: Any) -> date:
    if isinstance(value, datetime):
        raise InvalidMonthPatchError(label, name, "must be a date, not a datetime")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise InvalidMonthPatchError(label, name, f"not an ISO date: {value!r}") from None
    raise InvalidMonthPatchError(label, name, "must be a date or ISO date string")

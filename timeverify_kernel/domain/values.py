"""
Values -- Immutable domain value types for time verification.

Responsibility:
    Closed enums for aggregation categories, display categories and tour
    types, the SUN..SAT day keys used by every day vector, Decimal hour
    quantization and the case display formatting rules (TIN and taxpayer
    name).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by DTOs, selectors and every engine.  No outward dependencies.

Invariants enforced:
    - Hours are Decimal quantized to hundredths with ROUND_HALF_UP; floats
      are never accepted.
    - A day key is derived from the calendar weekday, never from the
      position of the date inside a window.

Failure modes:
    - TypeError from quantize_hours on float input.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


class Category(str, Enum):
    """Aggregation category of a time code, selected by its letter."""

    TOUR = "tour"
    CODE_DIRECT = "code_direct"
    OVERHEAD = "overhead"
    ADJUSTMENT = "adjustment"
    SCHEDULE = "schedule"
    INFO = "info"


class DisplayCategory(str, Enum):
    """Grouping letter shown beside a non-case row."""

    TIME = "T"
    ADJUSTMENT = "A"  # ADJUSTMENT and SCHEDULE letters
    INFO = "I"


class TourType(Enum):
    """Tour-of-duty type keyed by the employee's numeric tour code."""

    REGULAR = (1, "REG")
    FIVE_FOUR_NINE = (2, "5/4/9")
    FOUR_TEN = (3, "4/10")
    PART_TIME = (4, "PT")
    MAXI = (5, "MAXI")
    UNKNOWN = (None, "-")

    def __init__(self, code: int | None, label: str):
        self.code = code
        self.label = label

    @classmethod
    def from_code(cls, code: int | None) -> TourType:
        for member in cls:
            if member.code is not None and member.code == code:
                return member
        return cls.UNKNOWN


DAY_KEYS: tuple[str, ...] = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")

HOURS_QUANTUM = Decimal("0.01")
ZERO_HOURS = Decimal("0.00")


def day_key(d: date) -> str:
    """Return the SUN..SAT key for a date (Python's Monday=0 shifted to Sunday=0)."""
    return DAY_KEYS[(d.weekday() + 1) % 7]


def quantize_hours(value: Decimal | int | None) -> Decimal:
    """Quantize hours to two decimal places. None is zero."""
    if value is None:
        return ZERO_HOURS
    if isinstance(value, float):
        raise TypeError("Hours must be Decimal, not float")
    return Decimal(value).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


EIN_TIN_TYPE = 2


def format_tin(tin: int | None, tin_type: int | None) -> str:
    """Render a TIN as XX-XXXXXXX (EIN) or XXX-XX-XXXX (SSN).

    The number is zero-padded to nine digits first.  A missing TIN renders
    as an empty string.
    """
    if tin is None:
        return ""
    digits = f"{tin:09d}"
    if tin_type == EIN_TIN_TYPE:
        return f"{digits[:2]}-{digits[2:]}"
    return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"


def taxpayer_display_name(taxpayer_name: str | None, name_control: str | None) -> str:
    """Trimmed taxpayer name, else trimmed name control, else ""."""
    if taxpayer_name is not None and taxpayer_name.strip():
        return taxpayer_name.strip()
    return name_control.strip() if name_control is not None else ""

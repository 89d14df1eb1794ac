"""Selectors for the time verification kernel (read side)."""

from timeverify_kernel.selectors.calendar_selector import CalendarSelector
from timeverify_kernel.selectors.reference_selector import ReferenceSelector
from timeverify_kernel.selectors.time_record_selector import TimeRecordSelector

__all__ = [
    "CalendarSelector",
    "ReferenceSelector",
    "TimeRecordSelector",
]

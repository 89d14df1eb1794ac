"""Kernel services (write side, flush-only)."""

from timeverify_kernel.services.calendar_service import CalendarService

__all__ = ["CalendarService"]

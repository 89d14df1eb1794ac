"""
timeverify_services -- Package init and public API.

Responsibility:
    Orchestration services that compose the pure engines
    (timeverify_engines/) with database sessions and kernel selectors and
    services.  This is the only layer that holds a session and a
    configuration at the same time.

Architecture position:
    Services -- stateful orchestration over engines + kernel.

    Dependency direction (enforced by tests/architecture/test_layer_boundaries.py):
        timeverify_services/ -> timeverify_engines/  (allowed)
        timeverify_services/ -> timeverify_kernel/   (allowed)
        timeverify_services/ -> timeverify_config/   (allowed)
        timeverify_engines/  -> timeverify_services/ (FORBIDDEN)
        timeverify_kernel/   -> timeverify_services/ (FORBIDDEN)

Audit relevance:
    This package is the canonical import surface for external consumers.
"""

from timeverify_kernel.logging_config import get_logger

logger = get_logger("services")

from timeverify_services.fiscal_calendar_service import FiscalCalendarService
from timeverify_services.verification_service import (
    EmployeeTimesheet,
    TimeVerificationService,
)

__all__ = [
    "EmployeeTimesheet",
    "FiscalCalendarService",
    "TimeVerificationService",
]

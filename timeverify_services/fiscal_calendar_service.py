"""
timeverify_services.fiscal_calendar_service -- Fiscal calendar lifecycle.

Responsibility:
    Create, read, patch and delete fiscal years.  Generation is delegated
    to the pure ``generate_fiscal_year`` engine; persistence to the kernel
    ``CalendarService``; reads to ``CalendarSelector``.  Results are
    returned as labelled views (``FiscalYearView`` / ``FiscalMonthView``).

Architecture position:
    Services -- stateful orchestration over engines + kernel.

Invariants enforced:
    - A created year has twelve contiguous months totalling 52 weeks.
    - Mutations are all-or-nothing per call: the kernel service flushes
      inside the caller's transaction and validates before applying.
    - Deletion is refused while time records fall inside the year when
      ``calendar.protect_years_with_time_records`` is set.

Failure modes:
    - FiscalYearOutOfRangeError, DuplicateFiscalYearError on create.
    - FiscalYearNotFoundError on get / bulk update / delete of an absent year.
    - InvalidMonthTokenError, FiscalMonthNotFoundError, InvalidMonthPatchError
      on patches.
    - FiscalYearInUseError on protected delete.

Usage:
    from timeverify_services import FiscalCalendarService

    with session_scope() as session:
        calendar = FiscalCalendarService(session)
        view = calendar.create_fiscal_year(2026)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from timeverify_config import get_active_config
from timeverify_config.bridges import build_calendar_rules
from timeverify_config.schema import EngineConfig
from timeverify_engines import (
    FiscalMonthView,
    FiscalYearView,
    build_fiscal_year_view,
    build_month_view,
    generate_fiscal_year,
    parse_month_token,
    validate_fiscal_year,
)
from timeverify_kernel.domain.dtos import FiscalMonthPatch
from timeverify_kernel.exceptions import FiscalMonthNotFoundError, FiscalYearNotFoundError
from timeverify_kernel.logging_config import LogContext, get_logger
from timeverify_kernel.selectors import CalendarSelector
from timeverify_kernel.services import CalendarService

logger = get_logger("services.fiscal_calendar")

PatchInput = FiscalMonthPatch | Mapping[str, Any]


def _as_patch(patch: PatchInput) -> FiscalMonthPatch:
    if isinstance(patch, FiscalMonthPatch):
        return patch
    return FiscalMonthPatch.from_mapping(dict(patch))


class FiscalCalendarService:
    """
    Fiscal calendar facade.

    Contract:
        Receives a Session; an EngineConfig may be injected (defaults to
        ``get_active_config()``).  Flushes through CalendarService, never
        commits.

    Non-goals:
        - Does not check a patched month against its neighbours; patches
          are taken as given.
    """

    def __init__(self, session: Session, config: EngineConfig | None = None):
        self._session = session
        self._config = config or get_active_config()
        self._rules = build_calendar_rules(self._config)
        self._selector = CalendarSelector(session)
        self._writer = CalendarService(
            session,
            allowed_week_counts=self._rules.allowed_week_counts,
            workdays_range=self._rules.workdays_range,
        )

    def create_fiscal_year(
        self,
        fiscal_year: int,
        start_date: date | None = None,
        actor_id: str | None = None,
    ) -> FiscalYearView:
        """
        Generate and persist the twelve months of ``fiscal_year``.

        Args:
            start_date: Explicit first-month start; defaults to the Sunday on
                or before October 1 of ``fiscal_year - 1``.
        """
        with LogContext.bind(fiscal_year=str(fiscal_year), actor_id=actor_id):
            validate_fiscal_year(fiscal_year, self._rules)
            months = generate_fiscal_year(
                fiscal_year=fiscal_year, start_date=start_date, rules=self._rules
            )
            stored = self._writer.create_months(fiscal_year, months, actor_id=actor_id)
            return build_fiscal_year_view(fiscal_year, stored, self._rules)

    def get_fiscal_year(self, fiscal_year: int) -> FiscalYearView:
        months = self._selector.months_for_year(fiscal_year)
        if not months:
            raise FiscalYearNotFoundError(fiscal_year)
        return build_fiscal_year_view(fiscal_year, months, self._rules)

    def list_fiscal_years(self) -> tuple[int, ...]:
        return self._selector.fiscal_years()

    def get_fiscal_month(self, month_token: str) -> FiscalMonthView:
        parse_month_token(month_token)
        month = self._selector.month(month_token)
        if month is None:
            raise FiscalMonthNotFoundError(month_token)
        return build_month_view(month, self._rules)

    def update_month(
        self,
        month_token: str,
        patch: PatchInput,
        actor_id: str | None = None,
    ) -> FiscalMonthView:
        parse_month_token(month_token)
        with LogContext.bind(actor_id=actor_id):
            month = self._writer.patch_month(month_token, _as_patch(patch), actor_id=actor_id)
        return build_month_view(month, self._rules)

    def bulk_update_year(
        self,
        fiscal_year: int,
        patches: Sequence[PatchInput],
        actor_id: str | None = None,
    ) -> FiscalYearView:
        """Apply per-month patches; each must carry the month_token it targets."""
        resolved = [_as_patch(p) for p in patches]
        for patch in resolved:
            if patch.month_token:
                parse_month_token(patch.month_token)
        with LogContext.bind(fiscal_year=str(fiscal_year), actor_id=actor_id):
            months = self._writer.patch_year(fiscal_year, resolved, actor_id=actor_id)
        return build_fiscal_year_view(fiscal_year, months, self._rules)

    def delete_fiscal_year(self, fiscal_year: int, actor_id: str | None = None) -> int:
        """Delete every month of the year; returns the number of rows removed."""
        with LogContext.bind(fiscal_year=str(fiscal_year), actor_id=actor_id):
            return self._writer.delete_year(
                fiscal_year,
                protect_in_use=self._config.calendar.protect_years_with_time_records,
                actor_id=actor_id,
            )

"""
Module: timeverify_kernel.selectors.calendar_selector
Responsibility: Read access to fiscal months: one year, one token, all
    months, distinct years, and the reporting month for a date.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - A fiscal year's months are returned ordered by start_date, which is the
      OCT..SEP order for generated years.
    - Token lookups are case-insensitive; tokens are stored upper-case.
"""

from datetime import date

from sqlalchemy import func, select

from timeverify_kernel.domain.dtos import FiscalMonthInfo
from timeverify_kernel.models.fiscal_month import FiscalMonth
from timeverify_kernel.selectors.base import BaseSelector


class CalendarSelector(BaseSelector[FiscalMonth]):
    """Fiscal month queries."""

    def months_for_year(self, fiscal_year: int) -> tuple[FiscalMonthInfo, ...]:
        rows = self.session.execute(
            select(FiscalMonth)
            .where(FiscalMonth.fiscal_year == fiscal_year)
            .order_by(FiscalMonth.start_date, FiscalMonth.month_token)
        ).scalars().all()
        return tuple(FiscalMonthInfo.from_model(row) for row in rows)

    def count_months(self, fiscal_year: int) -> int:
        return self.session.execute(
            select(func.count()).select_from(FiscalMonth).where(
                FiscalMonth.fiscal_year == fiscal_year
            )
        ).scalar_one()

    def year_exists(self, fiscal_year: int) -> bool:
        return self.count_months(fiscal_year) > 0

    def month(self, month_token: str) -> FiscalMonthInfo | None:
        row = self.session.get(FiscalMonth, month_token.upper())
        return FiscalMonthInfo.from_model(row) if row is not None else None

    def all_months_descending(self) -> tuple[FiscalMonthInfo, ...]:
        rows = self.session.execute(
            select(FiscalMonth).order_by(FiscalMonth.start_date.desc())
        ).scalars().all()
        return tuple(FiscalMonthInfo.from_model(row) for row in rows)

    def fiscal_years(self) -> tuple[int, ...]:
        """Distinct fiscal years, newest first."""
        years = self.session.execute(
            select(FiscalMonth.fiscal_year)
            .distinct()
            .order_by(FiscalMonth.fiscal_year.desc())
        ).scalars().all()
        return tuple(years)

    def month_starting_on_or_before(self, as_of: date) -> FiscalMonthInfo | None:
        """Latest month whose start_date <= as_of."""
        row = self.session.execute(
            select(FiscalMonth)
            .where(FiscalMonth.start_date <= as_of)
            .order_by(FiscalMonth.start_date.desc())
            .limit(1)
        ).scalars().first()
        return FiscalMonthInfo.from_model(row) if row is not None else None

"""
Module: timeverify_kernel.models.fiscal_month
Responsibility: ORM persistence for fiscal calendar months.  Twelve rows make
    one fiscal year; posting cycles (weeks) are derived on read and never
    stored.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - month_token ("MMMYYYY") is the primary key.  Two concurrent creates of
      the same fiscal year collide here and exactly one flush succeeds.
    - fiscal_year is derived from the token when the row is created
      (OCT/NOV/DEC roll into the next fiscal year) and is the only column
      used to select a year's rows.

Failure modes:
    - IntegrityError on duplicate month_token; the calendar service
      translates it to DuplicateFiscalYearError.
"""

from datetime import date

from sqlalchemy import Date, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from timeverify_kernel.db.base import TrackedBase


class FiscalMonth(TrackedBase):
    """
    One month of a fiscal calendar.

    Contract:
        Rows are created twelve at a time by CalendarService, patched field by
        field, and deleted twelve at a time.

    Guarantees:
        - start_date <= end_date and end_date - start_date + 1 == weeks * 7
          for generated rows.  Patched rows are not re-validated across
          fields.

    Non-goals:
        - Holidays are not modeled; the column stays 0.
    """

    __tablename__ = "fiscal_months"

    __table_args__ = (
        Index("idx_fiscal_month_year", "fiscal_year"),
        Index("idx_fiscal_month_start", "start_date"),
    )

    month_token: Mapped[str] = mapped_column(String(7), primary_key=True)

    fiscal_year: Mapped[int] = mapped_column(Integer, nullable=False)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)

    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    weeks: Mapped[int] = mapped_column(Integer, nullable=False)

    start_cycle: Mapped[int] = mapped_column(Integer, nullable=False)

    end_cycle: Mapped[int] = mapped_column(Integer, nullable=False)

    workdays: Mapped[int] = mapped_column(Integer, nullable=False)

    holidays: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    active: Mapped[str] = mapped_column(String(1), default="Y", nullable=False)

    def __repr__(self) -> str:
        return f"<FiscalMonth {self.month_token}: {self.start_date} - {self.end_date}>"

"""
Module: timeverify_kernel.selectors.time_record_selector
Responsibility: Fetch an employee's case and non-case time records for an
    inclusive date range, and count records inside a date range (used by
    fiscal-year deletion protection).
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Both record sources are fetched with plain SELECTs inside the caller's
      transaction; the selector never writes.
    - Results are ordered by (report_date, grouping key) so downstream folds
      are deterministic.
"""

from datetime import date

from sqlalchemy import func, select

from timeverify_kernel.domain.dtos import CaseEntry, NonCaseEntry
from timeverify_kernel.models.time_record import CaseTimeRecord, NonCaseTimeRecord
from timeverify_kernel.selectors.base import BaseSelector


class TimeRecordSelector(BaseSelector[NonCaseTimeRecord]):
    """Read access to reported time."""

    def non_case_entries(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
    ) -> tuple[NonCaseEntry, ...]:
        query = (
            select(NonCaseTimeRecord)
            .where(
                NonCaseTimeRecord.employee_id == employee_id,
                NonCaseTimeRecord.report_date.between(start_date, end_date),
            )
            .order_by(NonCaseTimeRecord.report_date, NonCaseTimeRecord.time_code)
        )
        rows = self.session.execute(query).scalars().all()
        return tuple(NonCaseEntry.from_model(row) for row in rows)

    def case_entries(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
    ) -> tuple[CaseEntry, ...]:
        query = (
            select(CaseTimeRecord)
            .where(
                CaseTimeRecord.employee_id == employee_id,
                CaseTimeRecord.report_date.between(start_date, end_date),
            )
            .order_by(CaseTimeRecord.report_date, CaseTimeRecord.case_id)
        )
        rows = self.session.execute(query).scalars().all()
        return tuple(CaseEntry.from_model(row) for row in rows)

    def count_records_between(self, start_date: date, end_date: date) -> int:
        """Number of case plus non-case records dated inside [start, end]."""
        non_case = self.session.execute(
            select(func.count()).select_from(NonCaseTimeRecord).where(
                NonCaseTimeRecord.report_date.between(start_date, end_date)
            )
        ).scalar_one()
        case = self.session.execute(
            select(func.count()).select_from(CaseTimeRecord).where(
                CaseTimeRecord.report_date.between(start_date, end_date)
            )
        ).scalar_one()
        return non_case + case

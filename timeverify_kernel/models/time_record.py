"""
Module: timeverify_kernel.models.time_record
Responsibility: ORM persistence for the two sources of reported time:
    non-case records (hours against a time code) and case records (hours
    against a case).
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Hours are Numeric(9, 2) via the Base type_annotation_map.
    - Both tables are indexed on (employee_id, report_date) because every
      read is "one employee, inclusive date range".

Failure modes:
    - None at the model level; rows are external, read-only inputs.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import BigInteger, Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from timeverify_kernel.db.base import Base, UUIDString


class NonCaseTimeRecord(Base):
    """Hours an employee reported against a time code on one date."""

    __tablename__ = "non_case_time_records"

    __table_args__ = (
        Index("idx_non_case_employee_date", "employee_id", "report_date"),
    )

    id: Mapped[UUID] = mapped_column(UUIDString(), primary_key=True, default=uuid4)

    report_date: Mapped[date] = mapped_column(Date, nullable=False)

    employee_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    time_code: Mapped[str] = mapped_column(String(3), nullable=False)

    hours: Mapped[Decimal | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return (
            f"<NonCaseTimeRecord {self.employee_id} {self.report_date} "
            f"{self.time_code}: {self.hours}>"
        )


class CaseTimeRecord(Base):
    """Hours an employee reported against a case on one date."""

    __tablename__ = "case_time_records"

    __table_args__ = (
        Index("idx_case_employee_date", "employee_id", "report_date"),
        Index("idx_case_case_id", "case_id"),
    )

    id: Mapped[UUID] = mapped_column(UUIDString(), primary_key=True, default=uuid4)

    report_date: Mapped[date] = mapped_column(Date, nullable=False)

    employee_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # Opaque grouping key; resolves to CaseFile.case_id for display
    case_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    hours: Mapped[Decimal | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return (
            f"<CaseTimeRecord {self.employee_id} {self.report_date} "
            f"case={self.case_id}: {self.hours}>"
        )

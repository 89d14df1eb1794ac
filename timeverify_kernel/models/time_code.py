"""
Module: timeverify_kernel.models.time_code
Responsibility: ORM persistence for the time-code reference table.  Each row
    carries the single classification letter that drives aggregation.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - (code, code_type) is the primary key; the same code may exist under
      several types but only type "T" participates in time verification.

Failure modes:
    - IntegrityError on duplicate (code, code_type).

Audit relevance:
    Reference data owned outside this system.  The engine never writes it.
"""

from datetime import date

from sqlalchemy import Date, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from timeverify_kernel.db.base import Base


class TimeCode(Base):
    """
    Time code reference row.

    Contract:
        Read-only to the engine.  Classification helpers live in
        timeverify_engines.classifier, not on this model.
    """

    __tablename__ = "time_codes"

    __table_args__ = (
        Index("idx_time_code_type", "code_type"),
    )

    code: Mapped[str] = mapped_column(String(3), primary_key=True)

    # "T" for time codes; other types are ignored by verification
    code_type: Mapped[str] = mapped_column(String(1), primary_key=True)

    name: Mapped[str | None] = mapped_column(String(35), nullable=True)

    # Y or C means active
    active: Mapped[str | None] = mapped_column(String(1), nullable=True)

    # Classification letter (M, U, C, G, N, R, O, E, A, S, I, ...)
    time_definition: Mapped[str | None] = mapped_column(String(1), nullable=True)

    area: Mapped[int | None] = mapped_column(Integer, nullable=True)

    extract_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<TimeCode {self.code}/{self.code_type}: {self.time_definition}>"

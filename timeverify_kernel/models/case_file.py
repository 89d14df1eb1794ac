"""
Module: timeverify_kernel.models.case_file
Responsibility: ORM persistence for the case master table used to render a
    case's display TIN and taxpayer name.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - case_id is the primary key and matches CaseTimeRecord.case_id.
    - No foreign key: time may be charged to a case whose master row is
      absent.

Failure modes:
    - A missing row is not an error; breakdowns fall back to placeholders.
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from timeverify_kernel.db.base import Base


class CaseFile(Base):
    """Case master row (display data only)."""

    __tablename__ = "case_files"

    case_id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
    )

    tin: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    # 2 = EIN, anything else renders as SSN
    tin_type: Mapped[int | None] = mapped_column(Integer, nullable=True)

    taxpayer_name: Mapped[str | None] = mapped_column(String(70), nullable=True)

    name_control: Mapped[str | None] = mapped_column(String(4), nullable=True)

    def __repr__(self) -> str:
        return f"<CaseFile {self.case_id}: {self.tin}>"

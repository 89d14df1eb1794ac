"""
Module: timeverify_kernel.models.employee
Responsibility: ORM persistence for employee assignment rows.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - employee_id (assignment number) is the primary key.

Failure modes:
    - IntegrityError on duplicate employee_id.
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from timeverify_kernel.db.base import Base


class Employee(Base):
    """
    Employee assignment reference row.

    Contract:
        Read-only to the engine.  Eligibility for weekly verification is a
        pure predicate evaluated by the reference selector; it is not stored.
    """

    __tablename__ = "employees"

    employee_id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
    )

    name: Mapped[str | None] = mapped_column(String(35), nullable=True)

    grade: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Employee type letter (M, R, C, P, T, H, ...)
    employee_type: Mapped[str | None] = mapped_column(String(1), nullable=True)

    # Position type letter; B and V are excluded from verification
    position_type: Mapped[str | None] = mapped_column(String(1), nullable=True)

    # Numeric tour-of-duty code (1..5), see domain.values.TourType
    tour: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # A or Y means active
    active: Mapped[str | None] = mapped_column(String(1), nullable=True)

    def __repr__(self) -> str:
        return f"<Employee {self.employee_id}: {self.name}>"

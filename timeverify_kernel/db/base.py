"""
Module: timeverify_kernel.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.  Provides
    the type annotation map for consistent column types, the UUIDString type
    used for surrogate keys on time records, and the TrackedBase mixin for
    audit timestamps.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the kernel.  ALL model files import from here.  This module MUST NOT
    import from models/, services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - Hour precision: type_annotation_map maps Python Decimal to Numeric(9, 2).
      Time is recorded in hundredths of an hour.  NEVER use float for hours.
    - Audit timestamps: TrackedBase provides created_at and updated_at for
      mutable reference rows (fiscal months).

Failure modes:
    - IntegrityError on duplicate natural keys (time code + type, employee id,
      month token).  The calendar service relies on this for duplicate-year
      detection under concurrency.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID

from sqlalchemy import BigInteger, Date, DateTime, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """
    UUID type stored as String(36) for cross-database portability.

    Contract:
        Transparently converts between Python UUID objects and their 36-character
        string representation.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert UUID to string when storing."""
        if value is not None:
            return str(value)
        return None

    def process_result_value(self, value, dialect):
        """Convert string back to UUID when loading."""
        if value is not None:
            return PyUUID(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Contract:
        Every ORM model in the system inherits from Base (or TrackedBase).
        Reference tables are keyed by their natural keys, so Base does not
        impose a primary key column.

    Guarantees:
        - Decimal maps to Numeric(9, 2) -- two fractional digits of hours.
        - datetime maps to DateTime(timezone=True).
        - date maps to Date.
        - UUID maps to UUIDString.
        - int maps to BigInteger.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(9, 2),
        datetime: DateTime(timezone=True),
        date: Date,
        PyUUID: UUIDString(),
        int: BigInteger,
    }


class TrackedBase(Base):
    """
    Abstract base with audit timestamps.

    Contract:
        Rows that the engine itself creates and patches (fiscal months) record
        when they were created and last modified, and by whom when the caller
        supplies an actor.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    created_by: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    updated_by: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )


# Re-export UUID for convenience
UUID = PyUUID

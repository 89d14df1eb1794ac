"""
Module: timeverify_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors.
    Selectors are the read side of the kernel: they fetch reference data,
    reported time and fiscal months and hand them out as frozen DTOs.
Architecture position: Kernel > Selectors.  May import from db/base.py,
    models/ and domain/.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only access: selectors accept a Session from the caller but MUST
      NOT call session.add(), session.delete(), session.commit(), or
      session.flush().
    - DTO return convention: selectors return frozen dataclasses, never ORM
      instances.
    - Session ownership: the caller owns the session and its transaction,
      so every fetch for one employee's week sees one snapshot.

Failure modes:
    - None of their own; lookups that miss return None or an empty tuple and
      the calling service decides whether that is an error.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from timeverify_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only
        queries, and return DTOs.  They MUST NOT mutate any data.
    """

    def __init__(self, session: Session):
        """
        Args:
            session: SQLAlchemy session for database operations.
        """
        self.session = session

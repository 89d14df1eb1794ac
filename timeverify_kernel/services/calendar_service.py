"""
CalendarService -- fiscal month persistence lifecycle.

Responsibility:
    Writes fiscal months: creates a generated year's twelve rows, patches
    single months or a whole year, and deletes a year.  Month generation
    itself is pure and lives in ``timeverify_engines.calendar``; this
    service only persists what it is given.

Architecture position:
    Kernel > Services -- imperative shell, flush-only.

Invariants enforced:
    - A fiscal year is absent or complete: the existence check and the
      twelve inserts share one flush, and a primary-key collision from a
      concurrent create is rolled back and reported as a duplicate.
    - Bulk patches are validated in full before any row is touched.
    - Deletion is refused while time records fall inside the year, when
      protection is enabled.

Failure modes:
    - DuplicateFiscalYearError: the year already has month rows, or a
      concurrent create won the race.
    - FiscalYearNotFoundError: patch_year / delete_year on an absent year.
    - FiscalMonthNotFoundError: patch of an unknown token.
    - InvalidMonthPatchError: out-of-range weeks or workdays, a single-month
      patch naming another token, or a bulk patch whose token is missing or
      belongs to another year.
    - FiscalYearInUseError: delete_year with dependent time records.

Audit relevance:
    Every mutation is logged with the fiscal year, the touched tokens and
    the actor.  Refusals are logged at WARNING.
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from timeverify_kernel.domain.dtos import FiscalMonthInfo, FiscalMonthPatch
from timeverify_kernel.exceptions import (
    DuplicateFiscalYearError,
    FiscalMonthNotFoundError,
    FiscalYearInUseError,
    FiscalYearNotFoundError,
    InvalidMonthPatchError,
)
from timeverify_kernel.logging_config import get_logger
from timeverify_kernel.models.fiscal_month import FiscalMonth
from timeverify_kernel.selectors.calendar_selector import CalendarSelector
from timeverify_kernel.selectors.time_record_selector import TimeRecordSelector
from timeverify_kernel.services.base import BaseService

logger = get_logger("services.calendar")


class CalendarService(BaseService[FiscalMonth]):
    """
    Persists fiscal months.

    Contract:
        Methods flush but never commit.  The caller's transaction decides
        whether a created or deleted year becomes visible.

    Guarantees:
        - create_months writes all rows or raises with none written.
        - patch_year applies no patch unless every patch validates.

    Non-goals:
        - Does not generate month boundaries or cycle numbers.
        - Does not validate a patched month against its neighbours.
    """

    def __init__(
        self,
        session: Session,
        *,
        allowed_week_counts: frozenset[int] = frozenset({4, 5}),
        workdays_range: tuple[int, int] = (1, 31),
    ):
        super().__init__(session)
        self._allowed_week_counts = allowed_week_counts
        self._workdays_range = workdays_range
        self._calendar = CalendarSelector(session)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_months(
        self,
        fiscal_year: int,
        months: Sequence[FiscalMonthInfo],
        actor_id: str | None = None,
    ) -> tuple[FiscalMonthInfo, ...]:
        """
        Insert a generated fiscal year.

        Preconditions:
            Every month in ``months`` carries ``fiscal_year``.

        Raises:
            DuplicateFiscalYearError: If the year already has rows.
        """
        if self._calendar.year_exists(fiscal_year):
            logger.warning(
                "fiscal_year_create_rejected_duplicate",
                extra={"fiscal_year": fiscal_year},
            )
            raise DuplicateFiscalYearError(fiscal_year)

        for month in months:
            self.session.add(
                FiscalMonth(
                    month_token=month.month_token,
                    fiscal_year=month.fiscal_year,
                    start_date=month.start_date,
                    end_date=month.end_date,
                    weeks=month.weeks,
                    start_cycle=month.start_cycle,
                    end_cycle=month.end_cycle,
                    workdays=month.workdays,
                    holidays=month.holidays,
                    created_by=actor_id,
                    updated_by=actor_id,
                )
            )

        try:
            self.session.flush()
        except IntegrityError:
            # Another transaction created the same tokens first
            self.session.rollback()
            logger.warning(
                "concurrent_fiscal_year_create_conflict",
                extra={"fiscal_year": fiscal_year},
            )
            raise DuplicateFiscalYearError(fiscal_year)

        logger.info(
            "fiscal_months_created",
            extra={
                "fiscal_year": fiscal_year,
                "month_count": len(months),
                "actor_id": actor_id,
            },
        )
        return self._calendar.months_for_year(fiscal_year)

    # ------------------------------------------------------------------
    # Patch
    # ------------------------------------------------------------------

    def patch_month(
        self,
        month_token: str,
        patch: FiscalMonthPatch,
        actor_id: str | None = None,
    ) -> FiscalMonthInfo:
        """Apply the supplied fields of ``patch`` to one month."""
        row = self._get_row(month_token)
        if patch.month_token and patch.month_token.upper() != row.month_token:
            logger.warning(
                "fiscal_month_patch_rejected",
                extra={
                    "month_token": row.month_token,
                    "patch_month_token": patch.month_token,
                    "reason": "token mismatch",
                },
            )
            raise InvalidMonthPatchError(
                row.month_token,
                "month_token",
                f"patch targets {patch.month_token}",
            )
        self._validate_patch(row.month_token, patch)
        changed = self._apply(row, patch, actor_id)
        self.session.flush()

        logger.info(
            "fiscal_month_patched",
            extra={
                "month_token": row.month_token,
                "fiscal_year": row.fiscal_year,
                "fields": sorted(changed),
                "actor_id": actor_id,
            },
        )
        return FiscalMonthInfo.from_model(row)

    def patch_year(
        self,
        fiscal_year: int,
        patches: Sequence[FiscalMonthPatch],
        actor_id: str | None = None,
    ) -> tuple[FiscalMonthInfo, ...]:
        """
        Apply independent per-month patches to one fiscal year.

        Every patch must name a token that exists and belongs to
        ``fiscal_year``; otherwise nothing is applied.
        """
        if not self._calendar.year_exists(fiscal_year):
            raise FiscalYearNotFoundError(fiscal_year)

        resolved: list[tuple[FiscalMonth, FiscalMonthPatch]] = []
        for patch in patches:
            if not patch.month_token:
                logger.warning(
                    "fiscal_year_patch_rejected",
                    extra={"fiscal_year": fiscal_year, "reason": "missing month_token"},
                )
                raise InvalidMonthPatchError("?", "month_token", "required for bulk update")
            row = self._get_row(patch.month_token)
            if row.fiscal_year != fiscal_year:
                logger.warning(
                    "fiscal_year_patch_rejected",
                    extra={
                        "fiscal_year": fiscal_year,
                        "month_token": row.month_token,
                        "reason": "wrong fiscal year",
                    },
                )
                raise InvalidMonthPatchError(
                    row.month_token,
                    "month_token",
                    f"belongs to fiscal year {row.fiscal_year}, not {fiscal_year}",
                )
            self._validate_patch(row.month_token, patch)
            resolved.append((row, patch))

        for row, patch in resolved:
            self._apply(row, patch, actor_id)
        self.session.flush()

        logger.info(
            "fiscal_year_patched",
            extra={
                "fiscal_year": fiscal_year,
                "month_tokens": [row.month_token for row, _ in resolved],
                "actor_id": actor_id,
            },
        )
        return self._calendar.months_for_year(fiscal_year)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_year(
        self,
        fiscal_year: int,
        *,
        protect_in_use: bool = True,
        actor_id: str | None = None,
    ) -> int:
        """
        Delete every month row of ``fiscal_year``.

        Returns:
            Number of rows deleted.
        """
        rows = self.session.execute(
            select(FiscalMonth).where(FiscalMonth.fiscal_year == fiscal_year)
        ).scalars().all()
        if not rows:
            logger.warning(
                "fiscal_year_delete_rejected_not_found",
                extra={"fiscal_year": fiscal_year},
            )
            raise FiscalYearNotFoundError(fiscal_year)

        if protect_in_use:
            first_start = min(row.start_date for row in rows)
            last_end = max(row.end_date for row in rows)
            record_count = TimeRecordSelector(self.session).count_records_between(
                first_start, last_end
            )
            if record_count:
                logger.warning(
                    "fiscal_year_delete_rejected_in_use",
                    extra={"fiscal_year": fiscal_year, "record_count": record_count},
                )
                raise FiscalYearInUseError(fiscal_year, record_count)

        for row in rows:
            self.session.delete(row)
        self.session.flush()

        logger.info(
            "fiscal_months_deleted",
            extra={
                "fiscal_year": fiscal_year,
                "month_count": len(rows),
                "actor_id": actor_id,
            },
        )
        return len(rows)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_row(self, month_token: str) -> FiscalMonth:
        row = self.session.get(FiscalMonth, month_token.upper())
        if row is None:
            raise FiscalMonthNotFoundError(month_token)
        return row

    def _validate_patch(self, month_token: str, patch: FiscalMonthPatch) -> None:
        if patch.weeks is not None and patch.weeks not in self._allowed_week_counts:
            logger.warning(
                "fiscal_month_patch_rejected",
                extra={"month_token": month_token, "field": "weeks", "value": patch.weeks},
            )
            raise InvalidMonthPatchError(
                month_token,
                "weeks",
                f"must be one of {sorted(self._allowed_week_counts)}",
            )
        low, high = self._workdays_range
        if patch.workdays is not None and not low <= patch.workdays <= high:
            logger.warning(
                "fiscal_month_patch_rejected",
                extra={
                    "month_token": month_token,
                    "field": "workdays",
                    "value": patch.workdays,
                },
            )
            raise InvalidMonthPatchError(
                month_token, "workdays", f"must be between {low} and {high}"
            )

    @staticmethod
    def _apply(
        row: FiscalMonth,
        patch: FiscalMonthPatch,
        actor_id: str | None,
    ) -> dict:
        changes = patch.changes()
        for name, value in changes.items():
            setattr(row, name, value)
        if changes and actor_id is not None:
            row.updated_by = actor_id
        return changes

"""
timeverify_services.verification_service -- Weekly time verification.

Responsibility:
    Answer the two verification questions for a seven-day window:
    the group view (one WeeklySummary per eligible employee) and the
    single-employee timesheet (case and non-case drill-down tables).
    Also provides pay-period navigation and the reporting-month listing
    used to pick a window.

Architecture position:
    Services -- stateful orchestration over engines + kernel.
    Fetches through kernel selectors, computes through the pure engines,
    and never writes.

Invariants enforced:
    - Each employee's records are fetched once per source per call, inside
      the caller's session, so all sums see one snapshot.
    - Only employees passing the verification filter are summarized or
      given a timesheet.
    - The code table is read once per call and shared by every employee.

Failure modes:
    - InvalidWeekWindowError: reversed bounds or a window that is not
      exactly seven days.
    - EmployeeNotFoundError / EmployeeNotEligibleError from
      employee_timesheet.
    - FiscalMonthNotFoundError from weeks_for_month.

Audit relevance:
    Each call logs the window, employee count and duration.

Usage:
    from timeverify_services import TimeVerificationService

    with session_scope() as session:
        service = TimeVerificationService(session)
        rows = service.weekly_summaries(date(2025, 10, 5), date(2025, 10, 11))
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from timeverify_config import get_active_config
from timeverify_config.bridges import (
    build_breakdown_rules,
    build_classification_rules,
    build_eligibility_rule,
    build_summary_rules,
)
from timeverify_config.schema import EngineConfig
from timeverify_engines import (
    CaseBreakdownRow,
    CodeClassifier,
    NonCaseBreakdownRow,
    PayPeriod,
    ReportingMonth,
    ReportingWeek,
    WeeklySummary,
    WeekWindow,
    build_case_breakdown,
    build_noncase_breakdown,
    build_pay_period,
    build_reporting_month,
    order_summaries,
    reporting_weeks,
    summarize_week,
    week_start_for,
)
from timeverify_kernel.domain.eligibility import is_eligible
from timeverify_kernel.domain.values import quantize_hours
from timeverify_kernel.exceptions import (
    EmployeeNotEligibleError,
    EmployeeNotFoundError,
    FiscalMonthNotFoundError,
)
from timeverify_kernel.logging_config import LogContext, get_logger
from timeverify_kernel.selectors import (
    CalendarSelector,
    ReferenceSelector,
    TimeRecordSelector,
)

logger = get_logger("services.verification")


@dataclass(frozen=True)
class EmployeeTimesheet:
    """One employee's drill-down for one week."""

    employee_id: int
    employee_name: str | None
    week_start: date
    week_end: date
    reporting_month: str
    day_labels: tuple[str, ...]
    case_rows: tuple[CaseBreakdownRow, ...]
    non_case_rows: tuple[NonCaseBreakdownRow, ...]
    total_direct_case_time: Decimal
    total_non_credit_direct_case_time: Decimal


def day_label(d: date) -> str:
    """Render e.g. "Sunday 10/5"."""
    return f"{d:%A} {d.month}/{d.day}"


class TimeVerificationService:
    """
    Read-only verification facade.

    Contract:
        Receives a Session; an EngineConfig may be injected (defaults to
        ``get_active_config()``).  Never flushes or commits.

    Guarantees:
        - weekly_summaries is ordered by employee id, then tour (nulls last).
        - Table totals equal the sums of the returned row totals.

    Non-goals:
        - Does not snap dates to a week; callers use pay_period_for.
        - Does not render CSV.
    """

    def __init__(self, session: Session, config: EngineConfig | None = None):
        self._session = session
        self._config = config or get_active_config()
        self._classification_rules = build_classification_rules(self._config)
        self._summary_rules = build_summary_rules(self._config)
        self._breakdown_rules = build_breakdown_rules(self._config)
        self._eligibility = build_eligibility_rule(self._config)
        self._records = TimeRecordSelector(session)
        self._reference = ReferenceSelector(session)
        self._calendar = CalendarSelector(session)

    # ------------------------------------------------------------------
    # Group view
    # ------------------------------------------------------------------

    def weekly_summaries(
        self,
        week_start: date,
        week_end: date,
        employee_filter: str | int | None = None,
    ) -> list[WeeklySummary]:
        """
        Summaries for every eligible employee over the window.

        Args:
            employee_filter: Optional employee id prefix.
        """
        window = WeekWindow.of(week_start, week_end)
        t0 = time.monotonic()
        prefix = str(employee_filter) if employee_filter not in (None, "") else None

        classifier = self._classifier()
        employees = self._reference.eligible_employees(self._eligibility, id_prefix=prefix)

        summaries = []
        for employee in employees:
            summaries.append(
                summarize_week(
                    employee=employee,
                    window=window,
                    non_case_entries=self._records.non_case_entries(
                        employee.employee_id, window.start_date, window.end_date
                    ),
                    case_entries=self._records.case_entries(
                        employee.employee_id, window.start_date, window.end_date
                    ),
                    classifier=classifier,
                    rules=self._summary_rules,
                )
            )

        duration_ms = round((time.monotonic() - t0) * 1000, 2)
        logger.info(
            "weekly_summaries_computed",
            extra={
                "week_start": str(window.start_date),
                "week_end": str(window.end_date),
                "employee_filter": prefix,
                "employee_count": len(summaries),
                "duration_ms": duration_ms,
            },
        )
        return order_summaries(summaries)

    # ------------------------------------------------------------------
    # Single-employee timesheet
    # ------------------------------------------------------------------

    def employee_timesheet(
        self,
        employee_id: int,
        week_start: date,
        week_end: date,
    ) -> EmployeeTimesheet:
        window = WeekWindow.of(week_start, week_end)

        with LogContext.bind(employee_id=str(employee_id)):
            employee = self._reference.employee(employee_id)
            if employee is None:
                logger.warning("timesheet_employee_not_found")
                raise EmployeeNotFoundError(employee_id)
            if not is_eligible(employee, self._eligibility):
                logger.warning("timesheet_employee_not_eligible")
                raise EmployeeNotEligibleError(employee_id)

            non_case = self._records.non_case_entries(
                employee_id, window.start_date, window.end_date
            )
            case = self._records.case_entries(employee_id, window.start_date, window.end_date)

            case_rows = build_case_breakdown(
                window=window,
                entries=case,
                display=self._reference.case_display(e.case_id for e in case),
                rules=self._breakdown_rules,
            )
            non_case_rows = build_noncase_breakdown(
                window=window,
                entries=non_case,
                classifier=self._classifier(),
                rules=self._breakdown_rules,
            )

            timesheet = EmployeeTimesheet(
                employee_id=employee.employee_id,
                employee_name=employee.name,
                week_start=window.start_date,
                week_end=window.end_date,
                reporting_month=self.pay_period_for(window.start_date).reporting_month,
                day_labels=tuple(day_label(d) for d in window.days()),
                case_rows=case_rows,
                non_case_rows=non_case_rows,
                total_direct_case_time=quantize_hours(
                    sum((r.total for r in case_rows), Decimal("0"))
                ),
                total_non_credit_direct_case_time=quantize_hours(
                    sum((r.total for r in non_case_rows), Decimal("0"))
                ),
            )

            logger.info(
                "employee_timesheet_computed",
                extra={
                    "week_start": str(window.start_date),
                    "case_row_count": len(case_rows),
                    "non_case_row_count": len(non_case_rows),
                },
            )
            return timesheet

    # ------------------------------------------------------------------
    # Pay periods and reporting months
    # ------------------------------------------------------------------

    def pay_period_for(self, as_of: date) -> PayPeriod:
        """The Sunday..Saturday week containing ``as_of``."""
        start = week_start_for(as_of)
        return build_pay_period(start, self._calendar.month_starting_on_or_before(start))

    def previous_week(self, week_start: date) -> PayPeriod:
        return self.pay_period_for(week_start - timedelta(days=7))

    def next_week(self, week_start: date) -> PayPeriod:
        return self.pay_period_for(week_start + timedelta(days=7))

    def reporting_months(self) -> tuple[ReportingMonth, ...]:
        """Every persisted month, newest first, with its numbered weeks."""
        return tuple(
            build_reporting_month(month) for month in self._calendar.all_months_descending()
        )

    def weeks_for_month(self, month_token: str) -> tuple[ReportingWeek, ...]:
        month = self._calendar.month(month_token)
        if month is None:
            raise FiscalMonthNotFoundError(month_token)
        return reporting_weeks(month)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _classifier(self) -> CodeClassifier:
        codes = self._reference.time_codes(self._classification_rules.time_code_type)
        return CodeClassifier(codes, self._classification_rules)

"""
Module: timeverify_kernel.selectors.reference_selector
Responsibility: Read access to externally owned reference data: time codes,
    employees (with the verification filter) and case display info.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Only time codes of the configured type are returned by
      time_codes(); other types never reach the classifier.
    - Eligible employees are ordered by employee_id ascending.
    - Case display lookup is a single batch query; missing keys are simply
      absent from the returned mapping.
"""

from collections.abc import Iterable

from sqlalchemy import String, cast, select

from timeverify_kernel.domain.dtos import CaseDisplayInfo, EmployeeInfo, TimeCodeInfo
from timeverify_kernel.domain.eligibility import EligibilityRule, is_eligible
from timeverify_kernel.models.case_file import CaseFile
from timeverify_kernel.models.employee import Employee
from timeverify_kernel.models.time_code import TimeCode
from timeverify_kernel.selectors.base import BaseSelector


class ReferenceSelector(BaseSelector[TimeCode]):
    """Time codes, employees and case display info."""

    def time_codes(self, code_type: str = "T") -> dict[str, TimeCodeInfo]:
        """All codes of one type, keyed by code."""
        rows = self.session.execute(
            select(TimeCode).where(TimeCode.code_type == code_type).order_by(TimeCode.code)
        ).scalars().all()
        return {row.code: TimeCodeInfo.from_model(row) for row in rows}

    def time_code(self, code: str, code_type: str = "T") -> TimeCodeInfo | None:
        row = self.session.get(TimeCode, (code, code_type))
        return TimeCodeInfo.from_model(row) if row is not None else None

    def employee(self, employee_id: int) -> EmployeeInfo | None:
        row = self.session.get(Employee, employee_id)
        return EmployeeInfo.from_model(row) if row is not None else None

    def eligible_employees(
        self,
        rule: EligibilityRule,
        id_prefix: str | None = None,
    ) -> tuple[EmployeeInfo, ...]:
        """
        Employees passing the verification filter, optionally narrowed to
        ids starting with id_prefix.
        """
        query = (
            select(Employee)
            .where(
                Employee.employee_id.between(rule.min_employee_id, rule.max_employee_id),
                Employee.active.in_(sorted(rule.active_markers)),
            )
            .order_by(Employee.employee_id)
        )
        if id_prefix:
            query = query.where(
                cast(Employee.employee_id, String).startswith(id_prefix, autoescape=True)
            )
        rows = self.session.execute(query).scalars().all()
        candidates = (EmployeeInfo.from_model(row) for row in rows)
        return tuple(emp for emp in candidates if is_eligible(emp, rule))

    def case_display(self, case_ids: Iterable[int]) -> dict[int, CaseDisplayInfo]:
        ids = sorted(set(case_ids))
        if not ids:
            return {}
        rows = self.session.execute(
            select(CaseFile).where(CaseFile.case_id.in_(ids))
        ).scalars().all()
        return {row.case_id: CaseDisplayInfo.from_model(row) for row in rows}

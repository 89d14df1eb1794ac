"""
Eligibility -- which employees appear in weekly time verification.

Responsibility:
    The verification filter as a pure predicate over EmployeeInfo.  The
    reference selector narrows candidates in SQL by the id range and then
    applies this predicate, so the SQL and the single-employee check cannot
    disagree.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  The rule values come from
    configuration through timeverify_config.bridges.
"""

from __future__ import annotations

from dataclasses import dataclass

from timeverify_kernel.domain.dtos import EmployeeInfo


@dataclass(frozen=True)
class EligibilityRule:
    """Verification filter values."""

    active_markers: frozenset[str] = frozenset({"A", "Y"})
    employee_types: frozenset[str] = frozenset({"M", "R", "C", "P", "T"})
    excluded_position_types: frozenset[str] = frozenset({"B", "V"})
    # Types admitted regardless of position type
    unconditional_types: frozenset[str] = frozenset({"H"})
    min_employee_id: int = 21000000
    max_employee_id: int = 36999999


def is_eligible(employee: EmployeeInfo, rule: EligibilityRule) -> bool:
    if employee.active not in rule.active_markers:
        return False
    if not rule.min_employee_id <= employee.employee_id <= rule.max_employee_id:
        return False
    if employee.employee_type in rule.unconditional_types:
        return True
    return (
        employee.employee_type in rule.employee_types
        and employee.position_type not in rule.excluded_position_types
    )

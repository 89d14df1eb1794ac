"""ORM models for the time verification kernel."""

from timeverify_kernel.models.case_file import CaseFile
from timeverify_kernel.models.employee import Employee
from timeverify_kernel.models.fiscal_month import FiscalMonth
from timeverify_kernel.models.time_code import TimeCode
from timeverify_kernel.models.time_record import CaseTimeRecord, NonCaseTimeRecord

__all__ = [
    "CaseFile",
    "CaseTimeRecord",
    "Employee",
    "FiscalMonth",
    "NonCaseTimeRecord",
    "TimeCode",
]

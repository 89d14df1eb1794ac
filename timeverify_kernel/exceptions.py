"""
Typed Exception Hierarchy for the Time Verification Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (an HTTP layer, a batch job, a test) must be able to tell a missing
employee apart from a duplicate fiscal year without parsing message strings.

Every exception:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes (not just a message string)

Example:
    try:
        calendar.create_fiscal_year(2026)
    except DuplicateFiscalYearError as e:
        api_response(code=e.code, fiscal_year=e.fiscal_year)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    TimeVerifyError (base)
    |
    +-- NotFoundError
    |   +-- EmployeeNotFoundError
    |   +-- EmployeeNotEligibleError
    |   +-- FiscalYearNotFoundError
    |   +-- FiscalMonthNotFoundError
    |
    +-- InvalidArgumentError
    |   +-- DuplicateFiscalYearError
    |   +-- FiscalYearOutOfRangeError
    |   +-- InvalidWeekWindowError
    |   +-- InvalidMonthTokenError
    |   +-- InvalidMonthPatchError
    |
    +-- ConflictError
    |   +-- FiscalYearInUseError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Not found       | EMPLOYEE_NOT_FOUND          | Employee id doesn't exist
                | EMPLOYEE_NOT_ELIGIBLE       | Employee fails the verification filter
                | FISCAL_YEAR_NOT_FOUND       | No month rows for the fiscal year
                | FISCAL_MONTH_NOT_FOUND      | Month token doesn't exist
----------------|-----------------------------|-----------------------------------------
Invalid arg     | DUPLICATE_FISCAL_YEAR       | Fiscal year already has month rows
                | FISCAL_YEAR_OUT_OF_RANGE    | Year outside configured bounds
                | INVALID_WEEK_WINDOW         | End before start / not exactly 7 days
                | INVALID_MONTH_TOKEN         | Token is not MMMYYYY
                | INVALID_MONTH_PATCH         | Patch field out of range / wrong year
----------------|-----------------------------|-----------------------------------------
Conflict        | FISCAL_YEAR_IN_USE          | Time records fall inside the year
----------------|-----------------------------|-----------------------------------------
Configuration   | CONFIGURATION_ERROR         | Engine configuration failed validation

Inactive or unknown time codes are NOT errors: they contribute zero hours.
Missing case display info is NOT an error: placeholders are used.
"""


class TimeVerifyError(Exception):
    """
    Base exception for all time verification errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "TIME_VERIFY_ERROR"


# Not-found exceptions


class NotFoundError(TimeVerifyError):
    """Base exception for missing resources."""

    code: str = "RESOURCE_NOT_FOUND"


class EmployeeNotFoundError(NotFoundError):
    """Employee with given id was not found."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")


class EmployeeNotEligibleError(NotFoundError):
    """Employee exists but is filtered out of weekly time verification."""

    code: str = "EMPLOYEE_NOT_ELIGIBLE"

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee not eligible for time verification: {employee_id}")


class FiscalYearNotFoundError(NotFoundError):
    """No month rows exist for the fiscal year."""

    code: str = "FISCAL_YEAR_NOT_FOUND"

    def __init__(self, fiscal_year: int):
        self.fiscal_year = fiscal_year
        super().__init__(f"Fiscal year {fiscal_year} not found")


class FiscalMonthNotFoundError(NotFoundError):
    """Month row with given token was not found."""

    code: str = "FISCAL_MONTH_NOT_FOUND"

    def __init__(self, month_token: str):
        self.month_token = month_token
        super().__init__(f"Month {month_token} not found")


# Invalid-argument exceptions


class InvalidArgumentError(TimeVerifyError):
    """Base exception for rejected arguments."""

    code: str = "INVALID_ARGUMENT"


class DuplicateFiscalYearError(InvalidArgumentError):
    """Fiscal year already has month rows."""

    code: str = "DUPLICATE_FISCAL_YEAR"

    def __init__(self, fiscal_year: int):
        self.fiscal_year = fiscal_year
        super().__init__(f"Fiscal year {fiscal_year} already exists")


class FiscalYearOutOfRangeError(InvalidArgumentError):
    """Fiscal year is outside the configured bounds."""

    code: str = "FISCAL_YEAR_OUT_OF_RANGE"

    def __init__(self, fiscal_year: int, min_year: int, max_year: int):
        self.fiscal_year = fiscal_year
        self.min_year = min_year
        self.max_year = max_year
        super().__init__(
            f"Fiscal year {fiscal_year} must be between {min_year} and {max_year}"
        )


class InvalidWeekWindowError(InvalidArgumentError):
    """Week bounds are reversed or do not span exactly seven days."""

    code: str = "INVALID_WEEK_WINDOW"

    def __init__(self, start_date: str, end_date: str, reason: str):
        self.start_date = start_date
        self.end_date = end_date
        self.reason = reason
        super().__init__(f"Invalid week window {start_date} - {end_date}: {reason}")


class InvalidMonthTokenError(InvalidArgumentError):
    """Month token is not of the form MMMYYYY."""

    code: str = "INVALID_MONTH_TOKEN"

    def __init__(self, month_token: str):
        self.month_token = month_token
        super().__init__(f"Invalid month token: {month_token!r}")


class InvalidMonthPatchError(InvalidArgumentError):
    """A month patch carries an out-of-range value or targets the wrong year."""

    code: str = "INVALID_MONTH_PATCH"

    def __init__(self, month_token: str, field: str, reason: str):
        self.month_token = month_token
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid patch for {month_token}.{field}: {reason}")


# Conflict exceptions


class ConflictError(TimeVerifyError):
    """Base exception for operations refused because of dependent state."""

    code: str = "CONFLICT"


class FiscalYearInUseError(ConflictError):
    """Fiscal year cannot be deleted while time records fall inside it."""

    code: str = "FISCAL_YEAR_IN_USE"

    def __init__(self, fiscal_year: int, record_count: int):
        self.fiscal_year = fiscal_year
        self.record_count = record_count
        super().__init__(
            f"Fiscal year {fiscal_year} has {record_count} time record(s) "
            f"and cannot be deleted"
        )


# Configuration exceptions


class ConfigurationError(TimeVerifyError):
    """Engine configuration failed validation."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, section: str, reason: str):
        self.section = section
        self.reason = reason
        super().__init__(f"Invalid configuration [{section}]: {reason}")

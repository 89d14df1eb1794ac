"""
Pytest fixtures for the time verification test suite.

Provides:
- Database sessions (SQLite in-memory by default, any URL via DATABASE_URL)
- Reference-data factories (time codes, employees, cases, time records)
- Structured log capture

Environment Variables:
- DATABASE_URL: SQLAlchemy URL of a disposable database.  If not set, an
  in-memory SQLite database is used.
"""

import json
import logging
import os
from datetime import date
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from timeverify_config import get_active_config
from timeverify_kernel.db.engine import (
    create_tables,
    drop_tables,
    init_engine_from_url,
    reset_engine,
)
from timeverify_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from timeverify_kernel.models import (
    CaseFile,
    CaseTimeRecord,
    Employee,
    NonCaseTimeRecord,
    TimeCode,
)

TEST_ACTOR_ID = "test-actor"

DEFAULT_DATABASE_URL = "sqlite://"


def get_database_url() -> str:
    return os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture timeverify logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, calendar_service):
            calendar_service.create_fiscal_year(2026)
            logs = captured_logs()
            assert any(r["message"] == "fiscal_months_created" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("timeverify")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture(scope="session")
def db_engine():
    """Single engine for the entire test session."""
    eng = init_engine_from_url(get_database_url(), echo=False)
    yield eng
    reset_engine()


@pytest.fixture(scope="session")
def db_tables(db_engine):
    """Create all tables once per session, drop once at end."""
    drop_tables()
    create_tables()
    yield
    drop_tables()


@pytest.fixture(scope="function")
def session(db_tables, db_engine) -> Generator[Session, None, None]:
    """Provide a database session for testing.

    The session joins an outer transaction on a dedicated connection; its
    own commits and rollbacks operate on savepoints and the outer
    transaction is rolled back at teardown, undoing every change.
    """
    conn = db_engine.connect()
    trans = conn.begin()
    sess = Session(bind=conn, join_transaction_mode="create_savepoint", expire_on_commit=False)
    yield sess
    try:
        sess.close()
    finally:
        try:
            trans.rollback()
        finally:
            conn.close()


@pytest.fixture(scope="session")
def engine_config():
    return get_active_config()


# =============================================================================
# Reference data factories
# =============================================================================


@pytest.fixture
def add_time_code(session):
    def _add(
        code: str,
        letter: str | None,
        name: str | None = None,
        active: str | None = "Y",
        code_type: str = "T",
    ) -> TimeCode:
        row = TimeCode(
            code=code,
            code_type=code_type,
            name=name if name is not None else f"Code {code}",
            active=active,
            time_definition=letter,
        )
        session.add(row)
        session.flush()
        return row

    return _add


@pytest.fixture
def add_employee(session):
    def _add(
        employee_id: int,
        name: str | None = "DOE JANE",
        employee_type: str | None = "M",
        position_type: str | None = None,
        tour: int | None = 1,
        active: str | None = "A",
    ) -> Employee:
        row = Employee(
            employee_id=employee_id,
            name=name,
            employee_type=employee_type,
            position_type=position_type,
            tour=tour,
            active=active,
        )
        session.add(row)
        session.flush()
        return row

    return _add


@pytest.fixture
def add_case(session):
    def _add(
        case_id: int,
        tin: int | None = 123456789,
        tin_type: int | None = 1,
        taxpayer_name: str | None = "ACME CORP",
        name_control: str | None = "ACME",
    ) -> CaseFile:
        row = CaseFile(
            case_id=case_id,
            tin=tin,
            tin_type=tin_type,
            taxpayer_name=taxpayer_name,
            name_control=name_control,
        )
        session.add(row)
        session.flush()
        return row

    return _add


@pytest.fixture
def add_non_case_time(session):
    def _add(employee_id: int, report_date: date, time_code: str, hours) -> NonCaseTimeRecord:
        row = NonCaseTimeRecord(
            employee_id=employee_id,
            report_date=report_date,
            time_code=time_code,
            hours=Decimal(str(hours)) if hours is not None else None,
        )
        session.add(row)
        session.flush()
        return row

    return _add


@pytest.fixture
def add_case_time(session):
    def _add(employee_id: int, report_date: date, case_id: int, hours) -> CaseTimeRecord:
        row = CaseTimeRecord(
            employee_id=employee_id,
            report_date=report_date,
            case_id=case_id,
            hours=Decimal(str(hours)) if hours is not None else None,
        )
        session.add(row)
        session.flush()
        return row

    return _add


@pytest.fixture
def standard_codes(add_time_code):
    """A representative code table covering every letter class."""
    add_time_code("100", "M", name="Direct Exam")
    add_time_code("200", "O", name="Overhead Training Long Name")
    add_time_code("300", "U", name="Unassigned")
    add_time_code("400", "A", name="Annual Leave")
    add_time_code("500", "S", name="Sched Adj")
    add_time_code("600", "I", name="Info Only")
    add_time_code("700", "R", name="Review")
    add_time_code("750", "I", name="Travel Info")
    add_time_code("760", "I", name="No Time Day")
    add_time_code("800", "M", name="Retired Code", active="N")


@pytest.fixture
def test_actor_id() -> str:
    return TEST_ACTOR_ID

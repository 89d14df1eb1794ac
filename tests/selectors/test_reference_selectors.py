"""Tests for the read-side selectors."""

from datetime import date
from decimal import Decimal

from timeverify_kernel.domain.eligibility import EligibilityRule
from timeverify_kernel.selectors import (
    CalendarSelector,
    ReferenceSelector,
    TimeRecordSelector,
)
from timeverify_kernel.services import CalendarService
from timeverify_engines import generate_fiscal_year


class TestReferenceSelector:
    def test_time_codes_filtered_by_type(self, session, add_time_code):
        add_time_code("100", "M")
        add_time_code("100", "M", code_type="X")
        add_time_code("200", "O")
        codes = ReferenceSelector(session).time_codes("T")
        assert sorted(codes) == ["100", "200"]
        assert codes["100"].letter == "M"
        assert codes["100"].code_type == "T"

    def test_single_time_code(self, session, add_time_code):
        add_time_code("400", "A", name="Annual Leave")
        selector = ReferenceSelector(session)
        assert selector.time_code("400").name == "Annual Leave"
        assert selector.time_code("401") is None

    def test_eligible_employees(self, session, add_employee):
        add_employee(21000002)
        add_employee(21000001)
        add_employee(21000003, active="N")
        add_employee(37000000)
        found = ReferenceSelector(session).eligible_employees(EligibilityRule())
        assert [e.employee_id for e in found] == [21000001, 21000002]

    def test_prefix_is_literal(self, session, add_employee):
        add_employee(21000001)
        selector = ReferenceSelector(session)
        assert selector.eligible_employees(EligibilityRule(), id_prefix="2100") != ()
        assert selector.eligible_employees(EligibilityRule(), id_prefix="21%") == ()
        assert selector.eligible_employees(EligibilityRule(), id_prefix="_1") == ()

    def test_case_display_batch(self, session, add_case):
        add_case(9001, tin=123456789, tin_type=1, taxpayer_name=" ACME ")
        display = ReferenceSelector(session).case_display([9001, 9001, 9999])
        assert set(display) == {9001}
        assert display[9001].display_tin == "123-45-6789"
        assert display[9001].display_name == "ACME"

    def test_case_display_empty(self, session):
        assert ReferenceSelector(session).case_display([]) == {}


class TestTimeRecordSelector:
    def test_range_is_inclusive_and_per_employee(
        self, session, add_non_case_time, add_case_time
    ):
        add_non_case_time(21000001, date(2025, 10, 5), "100", "1")
        add_non_case_time(21000001, date(2025, 10, 11), "100", "2")
        add_non_case_time(21000001, date(2025, 10, 12), "100", "3")
        add_non_case_time(21000002, date(2025, 10, 6), "100", "4")
        add_case_time(21000001, date(2025, 10, 7), 9001, "5")

        selector = TimeRecordSelector(session)
        non_case = selector.non_case_entries(21000001, date(2025, 10, 5), date(2025, 10, 11))
        assert [e.hours for e in non_case] == [Decimal("1.00"), Decimal("2.00")]
        case = selector.case_entries(21000001, date(2025, 10, 5), date(2025, 10, 11))
        assert [e.case_id for e in case] == [9001]
        assert selector.count_records_between(date(2025, 10, 5), date(2025, 10, 11)) == 4

    def test_null_hours_preserved(self, session, add_non_case_time):
        add_non_case_time(21000001, date(2025, 10, 6), "760", None)
        entries = TimeRecordSelector(session).non_case_entries(
            21000001, date(2025, 10, 5), date(2025, 10, 11)
        )
        assert entries[0].hours is None


class TestCalendarSelector:
    def test_month_lookup_and_covering_month(self, session):
        CalendarService(session).create_months(2026, generate_fiscal_year(fiscal_year=2026))
        selector = CalendarSelector(session)
        assert selector.month("nov2025").start_date == date(2025, 10, 26)
        assert selector.month("NOV2030") is None
        assert selector.month_starting_on_or_before(date(2025, 11, 1)).month_token == "NOV2025"
        assert selector.month_starting_on_or_before(date(2025, 9, 27)) is None
        assert selector.year_exists(2026)
        assert not selector.year_exists(2027)

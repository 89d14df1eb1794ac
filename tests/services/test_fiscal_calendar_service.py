"""
Tests for FiscalCalendarService.

Covers:
- Create / duplicate / out-of-range
- Read: year view, month view, year listing
- Single and bulk month patches, all-or-nothing validation
- Delete, including protection against years with time records
"""

from dataclasses import replace
from datetime import date

import pytest

from timeverify_kernel.exceptions import (
    DuplicateFiscalYearError,
    FiscalMonthNotFoundError,
    FiscalYearInUseError,
    FiscalYearNotFoundError,
    FiscalYearOutOfRangeError,
    InvalidMonthPatchError,
    InvalidMonthTokenError,
)
from timeverify_kernel.domain.dtos import FiscalMonthPatch
from timeverify_kernel.selectors import CalendarSelector
from timeverify_services import FiscalCalendarService


@pytest.fixture
def calendar(session, engine_config):
    return FiscalCalendarService(session, engine_config)


class TestCreate:
    def test_create_returns_year_view(self, calendar, test_actor_id):
        view = calendar.create_fiscal_year(2026, actor_id=test_actor_id)
        assert view.fiscal_year == 2026
        assert view.display_label == "FY 2026"
        assert view.total_weeks == 52
        assert view.total_workdays == 260
        assert len(view.months) == 12
        assert view.months[0].month_token == "OCT2025"
        assert view.months[0].date_range == "Sep 28 - Oct 25"
        assert view.months[0].cycles[0].cycle_number == 202601

    def test_create_with_explicit_start(self, calendar):
        view = calendar.create_fiscal_year(2026, start_date=date(2025, 10, 5))
        assert view.months[0].month.start_date == date(2025, 10, 5)

    def test_duplicate_rejected(self, calendar, session):
        calendar.create_fiscal_year(2026)
        with pytest.raises(DuplicateFiscalYearError) as exc_info:
            calendar.create_fiscal_year(2026)
        assert exc_info.value.fiscal_year == 2026
        assert CalendarSelector(session).count_months(2026) == 12

    def test_out_of_range_rejected(self, calendar, session):
        with pytest.raises(FiscalYearOutOfRangeError):
            calendar.create_fiscal_year(1999)
        assert CalendarSelector(session).fiscal_years() == ()

    def test_create_is_logged(self, calendar, captured_logs, test_actor_id):
        calendar.create_fiscal_year(2026, actor_id=test_actor_id)
        created = [r for r in captured_logs() if r["message"] == "fiscal_months_created"]
        assert len(created) == 1
        assert str(created[0]["fiscal_year"]) == "2026"
        assert created[0]["month_count"] == 12
        assert created[0]["actor_id"] == test_actor_id


class TestRead:
    def test_get_fiscal_year(self, calendar):
        calendar.create_fiscal_year(2026)
        view = calendar.get_fiscal_year(2026)
        assert [m.month_token for m in view.months][-1] == "SEP2026"

    def test_get_missing_year(self, calendar):
        with pytest.raises(FiscalYearNotFoundError):
            calendar.get_fiscal_year(2030)

    def test_list_fiscal_years_descending(self, calendar):
        calendar.create_fiscal_year(2026)
        calendar.create_fiscal_year(2027)
        assert calendar.list_fiscal_years() == (2027, 2026)

    def test_get_month_case_insensitive(self, calendar):
        calendar.create_fiscal_year(2026)
        month = calendar.get_fiscal_month("dec2025")
        assert month.month_token == "DEC2025"
        assert month.month_name == "December"
        assert len(month.cycles) == 5

    def test_get_unknown_month(self, calendar):
        with pytest.raises(FiscalMonthNotFoundError):
            calendar.get_fiscal_month("OCT2040")

    def test_get_malformed_token(self, calendar):
        with pytest.raises(InvalidMonthTokenError):
            calendar.get_fiscal_month("OCTOBER")


class TestUpdateMonth:
    def test_patch_workdays(self, calendar, test_actor_id):
        calendar.create_fiscal_year(2026)
        month = calendar.update_month("OCT2025", {"workdays": 19}, actor_id=test_actor_id)
        assert month.hours == 19
        assert calendar.get_fiscal_month("OCT2025").hours == 19

    def test_patch_accepts_dataclass(self, calendar):
        calendar.create_fiscal_year(2026)
        month = calendar.update_month("NOV2025", FiscalMonthPatch(weeks=5))
        assert month.month.weeks == 5
        assert len(month.cycles) == 5

    @pytest.mark.parametrize("patch", [{"weeks": 6}, {"workdays": 0}, {"workdays": 32}])
    def test_out_of_range_values(self, calendar, patch):
        calendar.create_fiscal_year(2026)
        with pytest.raises(InvalidMonthPatchError):
            calendar.update_month("OCT2025", patch)
        assert calendar.get_fiscal_month("OCT2025").hours == 20

    def test_unknown_month(self, calendar):
        with pytest.raises(FiscalMonthNotFoundError):
            calendar.update_month("OCT2040", {"workdays": 10})

    def test_unknown_field(self, calendar):
        calendar.create_fiscal_year(2026)
        with pytest.raises(InvalidMonthPatchError) as exc_info:
            calendar.update_month("OCT2025", {"holidays": 2})
        assert exc_info.value.field == "holidays"

    def test_iso_date_string_accepted(self, calendar):
        calendar.create_fiscal_year(2026)
        month = calendar.update_month("OCT2025", {"start_date": "2025-09-29"})
        assert month.month.start_date == date(2025, 9, 29)
        assert calendar.get_fiscal_month("OCT2025").month.start_date == date(2025, 9, 29)

    @pytest.mark.parametrize(
        "patch",
        [
            {"start_date": "09/29/2025"},
            {"end_date": 20251025},
            {"workdays": "19"},
            {"weeks": 4.0},
            {"start_cycle": True},
        ],
    )
    def test_badly_typed_values(self, calendar, patch):
        calendar.create_fiscal_year(2026)
        with pytest.raises(InvalidMonthPatchError):
            calendar.update_month("OCT2025", patch)
        assert calendar.get_fiscal_month("OCT2025").month.start_date == date(2025, 9, 28)

    def test_patch_naming_another_month(self, calendar):
        calendar.create_fiscal_year(2026)
        with pytest.raises(InvalidMonthPatchError) as exc_info:
            calendar.update_month("OCT2025", {"month_token": "NOV2025", "workdays": 19})
        assert exc_info.value.field == "month_token"
        assert calendar.get_fiscal_month("OCT2025").hours == 20
        assert calendar.get_fiscal_month("NOV2025").hours == 20

    def test_patch_naming_same_month_in_lower_case(self, calendar):
        calendar.create_fiscal_year(2026)
        month = calendar.update_month("OCT2025", FiscalMonthPatch(month_token="oct2025", workdays=19))
        assert month.hours == 19


class TestBulkUpdate:
    def test_bulk_patch_applied(self, calendar):
        calendar.create_fiscal_year(2026)
        view = calendar.bulk_update_year(
            2026,
            [
                {"month_token": "OCT2025", "workdays": 18},
                {"month_token": "NOV2025", "weeks": 5},
            ],
        )
        by_token = {m.month_token: m for m in view.months}
        assert by_token["OCT2025"].hours == 18
        assert by_token["NOV2025"].month.weeks == 5

    def test_invalid_patch_applies_nothing(self, calendar):
        calendar.create_fiscal_year(2026)
        with pytest.raises(InvalidMonthPatchError):
            calendar.bulk_update_year(
                2026,
                [
                    {"month_token": "OCT2025", "workdays": 18},
                    {"month_token": "NOV2025", "workdays": 40},
                ],
            )
        assert calendar.get_fiscal_month("OCT2025").hours == 20

    def test_token_from_other_year_rejected(self, calendar):
        calendar.create_fiscal_year(2026)
        calendar.create_fiscal_year(2027)
        with pytest.raises(InvalidMonthPatchError) as exc_info:
            calendar.bulk_update_year(2026, [{"month_token": "OCT2026", "workdays": 18}])
        assert exc_info.value.field == "month_token"

    def test_missing_token_rejected(self, calendar):
        calendar.create_fiscal_year(2026)
        with pytest.raises(InvalidMonthPatchError):
            calendar.bulk_update_year(2026, [{"workdays": 18}])

    def test_missing_year(self, calendar):
        with pytest.raises(FiscalYearNotFoundError):
            calendar.bulk_update_year(2030, [{"month_token": "OCT2029", "workdays": 18}])


class TestDelete:
    def test_delete_year(self, calendar):
        calendar.create_fiscal_year(2026)
        assert calendar.delete_fiscal_year(2026) == 12
        with pytest.raises(FiscalYearNotFoundError):
            calendar.get_fiscal_year(2026)

    def test_delete_missing_year(self, calendar):
        with pytest.raises(FiscalYearNotFoundError):
            calendar.delete_fiscal_year(2026)

    def test_delete_refused_with_time_records(self, calendar, add_non_case_time):
        calendar.create_fiscal_year(2026)
        add_non_case_time(21000001, date(2026, 3, 3), "100", "8")
        with pytest.raises(FiscalYearInUseError) as exc_info:
            calendar.delete_fiscal_year(2026)
        assert exc_info.value.record_count == 1
        assert calendar.get_fiscal_year(2026).total_weeks == 52

    def test_records_outside_year_do_not_block(self, calendar, add_case_time):
        calendar.create_fiscal_year(2026)
        add_case_time(21000001, date(2025, 9, 27), 9001, "8")
        assert calendar.delete_fiscal_year(2026) == 12

    def test_protection_can_be_disabled(self, session, engine_config, add_case_time):
        config = replace(
            engine_config,
            calendar=replace(engine_config.calendar, protect_years_with_time_records=False),
        )
        calendar = FiscalCalendarService(session, config)
        calendar.create_fiscal_year(2026)
        add_case_time(21000001, date(2025, 10, 1), 9001, "8")
        assert calendar.delete_fiscal_year(2026) == 12

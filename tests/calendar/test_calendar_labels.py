"""Tests for month tokens, display labels and pay periods."""

from datetime import date

import pytest

from timeverify_engines.calendar import (
    build_fiscal_year_view,
    build_pay_period,
    build_reporting_month,
    fiscal_year_for_token,
    generate_fiscal_year,
    month_date_range_label,
    month_name,
    parse_month_token,
    pay_period_label,
    week_date_range_label,
    week_start_for,
)
from timeverify_kernel.exceptions import InvalidMonthTokenError


class TestTokens:
    def test_parse_is_case_insensitive(self):
        assert parse_month_token("oct2025") == ("OCT", 2025)

    @pytest.mark.parametrize("token", ["", "OCT25", "XYZ2025", "OCTOBER2025", "2025OCT"])
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidMonthTokenError):
            parse_month_token(token)

    @pytest.mark.parametrize(
        "token, year",
        [("OCT2025", 2026), ("DEC2025", 2026), ("JAN2026", 2026), ("SEP2026", 2026)],
    )
    def test_fiscal_year_for_token(self, token, year):
        assert fiscal_year_for_token(token) == year

    def test_month_name(self):
        assert month_name("SEP2026") == "September"


class TestLabels:
    def test_month_range(self):
        assert month_date_range_label(date(2025, 9, 28), date(2025, 10, 25)) == "Sep 28 - Oct 25"

    def test_week_range(self):
        assert (
            week_date_range_label(date(2025, 9, 28), date(2025, 10, 4))
            == "September 28 - October 4"
        )

    def test_pay_period_label_is_zero_padded(self):
        assert pay_period_label(date(2025, 10, 5), date(2025, 10, 11)) == "10/05/2025 - 10/11/2025"

    def test_fiscal_year_view(self):
        months = generate_fiscal_year(fiscal_year=2026)
        view = build_fiscal_year_view(2026, months)
        assert view.display_label == "FY 2026"
        assert view.total_weeks == 52
        assert view.total_workdays == 260
        assert view.months[0].date_range == "Sep 28 - Oct 25"
        assert view.months[0].month_name == "October"
        assert view.months[0].cycles[0].date_range == "September 28 - October 4"
        assert view.months[0].hours == 20


class TestPayPeriods:
    @pytest.mark.parametrize(
        "d, start",
        [
            (date(2025, 10, 5), date(2025, 10, 5)),
            (date(2025, 10, 8), date(2025, 10, 5)),
            (date(2025, 10, 11), date(2025, 10, 5)),
            (date(2025, 10, 1), date(2025, 9, 28)),
        ],
    )
    def test_week_start_is_sunday_on_or_before(self, d, start):
        assert week_start_for(d) == start

    def test_reporting_month_from_covering_month(self):
        oct_ = generate_fiscal_year(fiscal_year=2026)[0]
        period = build_pay_period(date(2025, 9, 28), oct_)
        assert period.reporting_month == "OCT2025"
        assert period.end_date == date(2025, 10, 4)
        assert period.display_label == "09/28/2025 - 10/04/2025"

    def test_reporting_month_fallback(self):
        period = build_pay_period(date(2025, 9, 28), None)
        assert period.reporting_month == "September 2025"

    def test_reporting_month_weeks(self):
        oct_ = generate_fiscal_year(fiscal_year=2026)[0]
        month = build_reporting_month(oct_)
        assert month.week_count == 4
        assert [w.week_number for w in month.weeks] == [1, 2, 3, 4]
        assert month.weeks[0].posting_cycle == 202601
        assert month.weeks[-1].display_label == "10/19/2025 - 10/25/2025"

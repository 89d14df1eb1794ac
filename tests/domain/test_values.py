"""Tests for domain value helpers: hours, day keys, tour types, case display."""

from datetime import date
from decimal import Decimal

import pytest

from timeverify_kernel.domain.values import (
    TourType,
    day_key,
    format_tin,
    quantize_hours,
    taxpayer_display_name,
)


class TestHours:
    def test_none_is_zero(self):
        assert quantize_hours(None) == Decimal("0.00")

    def test_half_up(self):
        assert quantize_hours(Decimal("2.345")) == Decimal("2.35")
        assert quantize_hours(Decimal("-2.345")) == Decimal("-2.35")

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            quantize_hours(1.5)


class TestDayKey:
    @pytest.mark.parametrize(
        "d, key",
        [
            (date(2025, 10, 5), "SUN"),
            (date(2025, 10, 6), "MON"),
            (date(2025, 10, 11), "SAT"),
        ],
    )
    def test_day_key(self, d, key):
        assert day_key(d) == key


class TestTourType:
    @pytest.mark.parametrize(
        "code, label",
        [(1, "REG"), (2, "5/4/9"), (3, "4/10"), (4, "PT"), (5, "MAXI"), (None, "-"), (9, "-")],
    )
    def test_labels(self, code, label):
        assert TourType.from_code(code).label == label


class TestCaseDisplay:
    def test_ssn_format(self):
        assert format_tin(123456789, 1) == "123-45-6789"

    def test_ein_format_zero_padded(self):
        assert format_tin(12345678, 2) == "01-2345678"

    def test_ssn_zero_padded(self):
        assert format_tin(1234, None) == "000-00-1234"

    def test_missing_tin(self):
        assert format_tin(None, 2) == ""

    def test_taxpayer_name_trimmed(self):
        assert taxpayer_display_name("  ACME CORP ", "ACME") == "ACME CORP"

    def test_name_control_fallback(self):
        assert taxpayer_display_name("   ", " ACME ") == "ACME"
        assert taxpayer_display_name(None, "ACME") == "ACME"

    def test_empty_fallback(self):
        assert taxpayer_display_name(None, None) == ""

"""
Tests for display formatting.

Formatters sit on the rendering path, so bad input must never raise.
"""

import logging

import pytest

from tripdates.config import Config
from tripdates.formatting.display import (
    extract_date_only,
    format_date_it,
    format_date_range,
    format_date_range_it,
    format_flight_date_time,
)


class TestFormatDateIT:

    def test_canonical_date(self):
        assert format_date_it("2026-01-20") == "20/01/2026"

    @pytest.mark.parametrize("value", ["garbage", "20/01/2026", "", "2026-01-20T10:30:00"])
    def test_pass_through(self, value):
        assert format_date_it(value) == value

    def test_none(self):
        assert format_date_it(None) == ""


class TestExtractDateOnly:

    @pytest.mark.parametrize("value,expected", [
        ("2026-01-20T10:30:00+01:00", "2026-01-20"),
        ("2026-01-20T10:30:00", "2026-01-20"),
        ("2026-01-20", "2026-01-20"),
        ("", ""),
        (None, ""),
    ])
    def test_extract(self, value, expected):
        assert extract_date_only(value) == expected


class TestFormatFlightDateTime:

    @pytest.mark.parametrize("value,expected", [
        ("2026-01-20T10:30:00+01:00", "20/01/2026 10:30"),
        ("2026-01-20T23:45:00-08:00", "20/01/2026 23:45"),
        ("2026-01-20T10:30:00Z", "20/01/2026 10:30"),
        ("2026-01-20T07:05:00", "20/01/2026 07:05"),
        ("2026-01-20", "20/01/2026"),
        ("0999-01-01T10:00:00", "01/01/0999 10:00"),
    ])
    def test_wall_clock_formatting(self, value, expected):
        assert format_flight_date_time(value) == expected

    def test_empty(self):
        assert format_flight_date_time("") == ""
        assert format_flight_date_time(None) == ""

    def test_unparseable_does_not_raise(self):
        assert isinstance(format_flight_date_time("not a datetime"), str)


class TestFormatDateRange:

    @pytest.mark.parametrize("start,end,expected", [
        ("2026-01-10", "2026-01-15", "10-15 Gennaio 2026"),
        ("2026-01-28", "2026-02-05", "28 Gennaio - 5 Febbraio 2026"),
        ("2026-12-28", "2027-01-03", "28 Dicembre 2026 - 3 Gennaio 2027"),
        ("2026-01-10", "2027-01-12", "10 Gennaio 2026 - 12 Gennaio 2027"),
        ("2026-08-01T10:00:00", "2026-08-04T18:30:00", "1-4 Agosto 2026"),
    ])
    def test_italian_ranges(self, start, end, expected):
        assert format_date_range_it(start, end) == expected

    @pytest.mark.parametrize("start,end", [
        ("", "2026-01-01"),
        ("2026-01-01", ""),
        (None, "2026-01-01"),
        ("garbage", "2026-01-01"),
        ("2026-13-01", "2026-01-05"),
    ])
    def test_missing_or_unreadable(self, start, end):
        assert format_date_range_it(start, end) == ""

    def test_english_locale(self):
        assert format_date_range("2026-01-28", "2026-02-05", locale="en") == \
            "28 January - 5 February 2026"

    def test_default_locale(self):
        assert format_date_range("2026-01-10", "2026-01-15") == "10-15 Gennaio 2026"

    def test_unknown_locale_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = format_date_range("2026-01-10", "2026-01-15", locale="xx")

        assert result == "10-15 Gennaio 2026"
        assert "Unknown locale" in caplog.text

    def test_month_tables_are_complete(self):
        for names in Config.MONTH_NAMES.values():
            assert len(names) == 12


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

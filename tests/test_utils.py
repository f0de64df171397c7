"""Tests for shared utility functions."""

from datetime import datetime

import pytest

from src.errors import DateUnparseable
from src.utils import format_instant, normalize_name, parse_instant


class TestNormalizeName:
    def test_lowercases(self):
        assert normalize_name("Premium Widget") == "premium widget"

    def test_collapses_whitespace(self):
        assert normalize_name("  Super \t Gadget  ") == "super gadget"

    def test_already_normal(self):
        assert normalize_name("consultation hour") == "consultation hour"


class TestParseInstant:
    def test_naive_datetime(self):
        assert parse_instant("2030-03-18T10:00:00") == datetime(2030, 3, 18, 10, 0)

    def test_trailing_z_is_utc(self):
        assert parse_instant("2030-03-18T10:00:00Z") == datetime(2030, 3, 18, 10, 0)

    def test_offset_converted_to_utc(self):
        assert parse_instant("2030-03-18T10:00:00+02:00") == datetime(2030, 3, 18, 8, 0)

    def test_bare_date_is_midnight(self):
        assert parse_instant("2030-03-18") == datetime(2030, 3, 18)

    def test_strips_whitespace(self):
        assert parse_instant("  2030-03-18T10:30 ") == datetime(2030, 3, 18, 10, 30)

    @pytest.mark.parametrize("raw", ["", "   ", "next tuesday", "2030-13-45T99:00"])
    def test_unparseable(self, raw):
        with pytest.raises(DateUnparseable):
            parse_instant(raw)


class TestFormatInstant:
    def test_minute_precision(self):
        assert format_instant(datetime(2030, 3, 18, 9, 5, 59)) == "2030-03-18 09:05"

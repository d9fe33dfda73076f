"""Parsing of CLI dates, times and stream names."""

from datetime import date, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from skuff.core.errors import InvalidDateTime, InvalidStreamName
from skuff.core.timeparse import from_local, parse_date, parse_time, validate_stream


class TestParseTime:
    @pytest.mark.parametrize("text, expected", [
        ("09:30", time(9, 30)),
        ("9:05", time(9, 5)),
        ("17:45:10", time(17, 45, 10)),
    ])
    def test_valid(self, text, expected):
        assert parse_time(text) == expected

    @pytest.mark.parametrize("text", ["25:00", "noon", "9", ""])
    def test_invalid(self, text):
        with pytest.raises(InvalidDateTime):
            parse_time(text)


class TestParseDate:
    def test_iso(self):
        assert parse_date("2024-02-29") == date(2024, 2, 29)

    def test_day_month_uses_reference_year(self):
        assert parse_date("29.02", reference=date(2024, 6, 1)) == date(2024, 2, 29)

    def test_day_month_invalid_for_year(self):
        with pytest.raises(InvalidDateTime):
            parse_date("29.02", reference=date(2023, 6, 1))

    @pytest.mark.parametrize("text", ["2024/01/01", "1.2.3", "yesterday"])
    def test_invalid(self, text):
        with pytest.raises(InvalidDateTime):
            parse_date(text)


class TestFromLocal:
    def test_fixed_offset(self):
        cet = timezone(timedelta(hours=1))
        dt = from_local(date(2023, 1, 1), time(10, 0), cet)
        assert dt.tzinfo == timezone.utc
        assert (dt.hour, dt.minute) == (9, 0)

    def test_dst_gap_rejected(self):
        with pytest.raises(InvalidDateTime):
            from_local(date(2024, 3, 31), time(2, 30), ZoneInfo("Europe/Berlin"))

    def test_dst_overlap_rejected(self):
        with pytest.raises(InvalidDateTime):
            from_local(date(2024, 10, 27), time(2, 30), ZoneInfo("Europe/Berlin"))

    def test_system_local(self):
        dt = from_local(date(2023, 6, 1), time(12, 0))
        assert dt.tzinfo == timezone.utc


class TestValidateStream:
    @pytest.mark.parametrize("name", ["work", "side-project", "2024_q1"])
    def test_valid(self, name):
        assert validate_stream(name) == name

    @pytest.mark.parametrize("name", ["", "a b", "a/b", "über"])
    def test_invalid(self, name):
        with pytest.raises(InvalidStreamName):
            validate_stream(name)

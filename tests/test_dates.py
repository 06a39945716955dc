"""Tests for src.core.dates — log-date normalisation and day bounds."""

import pytest
from datetime import date, datetime, timezone

from src.config import settings
from src.core.dates import day_bounds, now_iso, parse_day, parse_log_date, today
from src.core.errors import ValidationError


class TestParseLogDate:
    def test_bare_date_is_midnight(self):
        assert parse_log_date("2025-03-10") == "2025-03-10T00:00:00.000"

    def test_naive_datetime_kept_as_wall_clock(self):
        assert parse_log_date("2025-03-10T23:59:59") == "2025-03-10T23:59:59.000"

    def test_aware_datetime_converted_to_configured_zone(self):
        # Europe/Berlin is UTC+1 in March before DST
        assert parse_log_date("2025-03-10T22:30:00Z") == "2025-03-10T23:30:00.000"
        assert parse_log_date("2025-03-10T23:30:00+00:00") == "2025-03-11T00:30:00.000"

    def test_date_and_datetime_objects(self):
        assert parse_log_date(date(2025, 3, 10)) == "2025-03-10T00:00:00.000"
        assert parse_log_date(datetime(2025, 3, 10, 8, 15)) == "2025-03-10T08:15:00.000"
        aware = datetime(2025, 7, 1, 10, 0, tzinfo=timezone.utc)
        assert parse_log_date(aware) == "2025-07-01T12:00:00.000"

    @pytest.mark.parametrize("bad", ["", "   ", "yesterday", "2025-13-40"])
    def test_invalid_raises(self, bad):
        with pytest.raises(ValidationError):
            parse_log_date(bad)


class TestDayBounds:
    def test_bounds_cover_whole_day(self):
        start, end = day_bounds(date(2025, 3, 10))
        assert start == "2025-03-10T00:00:00.000"
        assert end == "2025-03-10T23:59:59.999"

    def test_last_second_inside_next_midnight_outside(self):
        start, end = day_bounds(date(2025, 3, 10))
        assert start <= "2025-03-10T23:59:59.000" <= end
        assert not (start <= "2025-03-11T00:00:00.000" <= end)


class TestParseDay:
    def test_none_is_today(self):
        assert parse_day(None) == today() == datetime.now(settings.tz).date()

    def test_iso_string_with_time_uses_date_part(self):
        assert parse_day("2025-03-10T18:00:00") == date(2025, 3, 10)

    def test_invalid_raises(self):
        with pytest.raises(ValidationError):
            parse_day("not-a-date")

    def test_offset_timestamp_resolves_to_local_day(self):
        # 23:30 UTC on the 10th is 00:30 on the 11th in Berlin
        assert parse_day("2025-03-10T23:30:00Z") == date(2025, 3, 11)
        assert parse_day("2025-03-10T22:30:00+00:00") == date(2025, 3, 10)
        aware = datetime(2025, 3, 10, 23, 30, tzinfo=timezone.utc)
        assert parse_day(aware) == date(2025, 3, 11)

    def test_matches_stored_log_date(self):
        stamp = "2025-03-10T23:30:00Z"
        start, end = day_bounds(parse_day(stamp))
        assert start <= parse_log_date(stamp) <= end


class TestNow:
    def test_now_iso_is_local_wall_clock(self):
        stamp = now_iso()
        assert len(stamp) == len("2025-03-10T00:00:00.000")
        assert stamp[:10] in {
            today().isoformat(),
            datetime.now(settings.tz).date().isoformat(),
        }

"""Tests for the clock and time-of-day helpers."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from lifeboard.services.timezone import (
    TimezoneService,
    get_timezone_service,
    now,
    reset_timezone_service,
    to_24h,
    today,
)


class TestTo24h:
    @pytest.mark.parametrize(
        "fragment,expected",
        [
            ("2pm", (14, 0)),
            ("2 PM", (14, 0)),
            ("2:30pm", (14, 30)),
            ("12pm", (12, 0)),
            ("12am", (0, 0)),
            ("9am", (9, 0)),
            ("14:05", (14, 5)),
            ("09:00", (9, 0)),
        ],
    )
    def test_clock_times(self, fragment, expected):
        assert to_24h(fragment) == expected

    @pytest.mark.parametrize("fragment", [None, "", "evening", "morning", "7", "25:00", "9:75"])
    def test_not_a_time(self, fragment):
        assert to_24h(fragment) is None


class TestTimezoneService:
    def test_explicit_timezone(self):
        service = TimezoneService("Europe/London")
        assert service.default_timezone == "Europe/London"
        assert service.tzinfo == ZoneInfo("Europe/London")

    def test_unknown_timezone_falls_back_to_utc(self):
        service = TimezoneService("Mars/Olympus")
        assert service.default_timezone == "UTC"

    def test_now_is_aware(self):
        current = TimezoneService("Asia/Tokyo").now()
        assert current.tzinfo == ZoneInfo("Asia/Tokyo")

    def test_today_matches_now(self):
        service = TimezoneService("UTC")
        assert service.today() == service.now().date()

    def test_combine(self):
        service = TimezoneService("America/New_York")
        result = service.combine(date(2026, 10, 20), 14, 30)
        assert result == datetime(2026, 10, 20, 14, 30, tzinfo=ZoneInfo("America/New_York"))
        # EDT still applies in late October
        assert result.utcoffset().total_seconds() == -4 * 3600


class TestSingleton:
    def setup_method(self):
        reset_timezone_service()

    def teardown_method(self):
        reset_timezone_service()

    def test_same_instance(self):
        assert get_timezone_service() is get_timezone_service()

    def test_first_call_sets_timezone(self):
        service = get_timezone_service("Australia/Sydney")
        assert service.default_timezone == "Australia/Sydney"
        assert get_timezone_service("UTC").default_timezone == "Australia/Sydney"

    def test_module_helpers(self):
        get_timezone_service("UTC")
        assert now().tzinfo == ZoneInfo("UTC")
        assert isinstance(today(), date)

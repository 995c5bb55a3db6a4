"""
Unit tests for the service time zone helpers.

Tests cover:
- Configured IANA zones
- The server-local fallback following DST across the year
- Day bounds covering the whole local calendar day
"""

import os
import time
from datetime import date, datetime, timedelta

import pytest

from stocktrade.core.timezone import day_bounds, localize, resolve_timezone


@pytest.fixture
def new_york_local_time():
    """Run the test with the process time zone set to America/New_York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    yield
    if previous is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = previous
    time.tzset()


class TestResolveTimezone:
    """Tests for choosing the service zone."""

    def test_configured_zone(self):
        tz = resolve_timezone("Europe/London")

        winter_start, _ = day_bounds(date(2024, 1, 15), tz)
        summer_start, _ = day_bounds(date(2024, 7, 15), tz)

        assert winter_start.utcoffset() == timedelta(0)
        assert summer_start.utcoffset() == timedelta(hours=1)

    def test_local_zone_follows_dst(self, new_york_local_time):
        """
        GIVEN no configured zone and a server in America/New_York
        WHEN day bounds are computed for a January and a July date
        THEN each day uses its own offset (EST in winter, EDT in summer)
        """
        tz = resolve_timezone()

        winter_start, winter_end = day_bounds(date(2024, 1, 15), tz)
        summer_start, summer_end = day_bounds(date(2024, 7, 15), tz)

        assert winter_start.utcoffset() == timedelta(hours=-5)
        assert winter_end.utcoffset() == timedelta(hours=-5)
        assert summer_start.utcoffset() == timedelta(hours=-4)
        assert summer_end.utcoffset() == timedelta(hours=-4)

    def test_late_evening_record_stays_on_its_day(self, new_york_local_time):
        """
        GIVEN a record at 23:30 local time on a winter day
        WHEN checked against that day's bounds
        THEN it falls inside them
        """
        tz = resolve_timezone()
        start, end = day_bounds(date(2024, 1, 15), tz)
        late = localize(datetime(2024, 1, 15, 23, 30), tz)

        assert start <= late <= end
        assert late.utcoffset() == timedelta(hours=-5)

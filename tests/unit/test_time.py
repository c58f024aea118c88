"""
Unit Tests for Time Utilities

Run with:
    pytest tests/unit/test_time.py -v
"""

from datetime import datetime, timezone

import pytest

from core.utils.time import current_utc_timestamp, datetime_to_timestamp, to_utc_datetime


class TestTimestamps:

    def test_milliseconds_keep_sub_second_precision(self):
        dt = datetime(2024, 1, 1, 12, 0, 0, 250000, tzinfo=timezone.utc)
        assert datetime_to_timestamp(dt, milliseconds=True) == 1704110400250
        assert datetime_to_timestamp(dt) == 1704110400

    def test_naive_datetime_is_utc(self):
        assert datetime_to_timestamp(datetime(2024, 1, 1, 12, 0, 0)) == 1704110400

    def test_current_timestamp_in_milliseconds(self):
        seconds = current_utc_timestamp()
        millis = current_utc_timestamp(milliseconds=True)
        assert millis >= seconds * 1000
        assert millis - seconds * 1000 < 5000

    def test_to_utc_datetime_detects_milliseconds(self):
        assert to_utc_datetime(1704110400000) == to_utc_datetime(1704110400)

    def test_negative_timestamp(self):
        with pytest.raises(ValueError):
            to_utc_datetime(-1)

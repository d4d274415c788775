"""Tests for converting between marks and datetimes."""

from datetime import date, datetime, timedelta, timezone

import pytest
from dateutil.rrule import HOURLY, rrule

from timelane import Lane, Rounding, datetime_of, mark_of, scale

SECOND_2017 = 6210 * 86400 + 5


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_mark_of_date():
    """Test that a date is midnight UTC."""
    assert mark_of(date(2000, 1, 1), Lane.DAY) == 1
    assert mark_of(date(2000, 2, 1), Lane.DAY) == 32
    assert mark_of(date(2000, 2, 1), "month") == 2
    assert mark_of(date(1999, 12, 31), Lane.YEAR) == 1999
    assert mark_of(date(2000, 1, 1)) == 0


def test_mark_of_first_and_last_supported_dates():
    """Test that day marks agree with date ordinals at the ends of datetime's range."""
    epoch = date(2000, 1, 1).toordinal()
    for value in (date(1, 1, 1), date(9999, 12, 31)):
        assert mark_of(value, Lane.DAY) == value.toordinal() - epoch + 1


def test_mark_of_string():
    """Test ISO-8601 strings, read as UTC unless they carry an offset."""
    assert mark_of("2000-01-01T00:01:00Z") == 60
    assert mark_of("2000-01-01T00:01:00") == 60
    assert mark_of("2000-01-01T01:00:00+01:00") == 0
    assert mark_of("2000-03-01", Lane.DAY) == 61


def test_mark_of_counts_leap_seconds():
    """Test that seconds after 2016 include all five leap seconds since 2000."""
    assert mark_of(utc(2017, 1, 1)) == SECOND_2017
    assert mark_of(utc(2016, 12, 31, 23, 59, 59)) == SECOND_2017 - 2


def test_mark_of_aware_datetime_in_other_zone():
    """Test that aware datetimes are converted to UTC first."""
    plus_two = timezone(timedelta(hours=2))
    assert mark_of(datetime(2000, 1, 1, 2, 0, tzinfo=plus_two)) == 0
    assert mark_of(datetime(2000, 1, 1, 1, 0, tzinfo=plus_two), Lane.DAY) == 0


def test_mark_of_rounding():
    """Test rounding of a moment between two marks."""
    moment = utc(2000, 1, 1, 0, 0, 0, 1)
    assert mark_of(moment, Lane.MILLISECOND) == 0
    assert mark_of(moment, Lane.MILLISECOND, Rounding.UP) == 1
    assert mark_of(moment, Lane.YEAR, "up") == 2001
    assert mark_of(utc(2000, 1, 1), Lane.YEAR, "up") == 2000


def test_mark_of_sub_microsecond_lane():
    """Test that nanosecond marks start at the microsecond."""
    moment = utc(2000, 1, 1, 0, 0, 0, 1)
    assert mark_of(moment, Lane.NANOSECOND) == 1000
    assert mark_of(moment, Lane.NANOSECOND, Rounding.UP) == 1000


def test_mark_of_rejects_naive_datetime():
    """Test that naive datetimes are refused with a hint."""
    with pytest.raises(TypeError, match="timezone-aware"):
        mark_of(datetime(2000, 1, 1))


def test_mark_of_rejects_other_types():
    """Test that numbers are not moments."""
    with pytest.raises(TypeError, match="accepts a datetime, date or ISO-8601"):
        mark_of(12345)


def test_mark_of_rejects_invalid_string():
    """Test that malformed strings raise ValueError."""
    with pytest.raises(ValueError):
        mark_of("not a date")


def test_datetime_of():
    """Test the start of marks in several lanes."""
    assert datetime_of(0) == utc(2000, 1, 1)
    assert datetime_of(32, Lane.DAY) == utc(2000, 2, 1)
    assert datetime_of(2, "month") == utc(2000, 2, 1)
    assert datetime_of(2016, Lane.YEAR) == utc(2016, 1, 1)
    assert datetime_of(0, Lane.HOUR) == utc(2000, 1, 1)
    assert datetime_of(-1, Lane.HOUR) == utc(1999, 12, 31, 23)
    assert datetime_of(1500, Lane.NANOSECOND) == utc(2000, 1, 1, 0, 0, 0, 1)


def test_datetime_of_around_a_leap_second():
    """Test the seconds on both sides of 2016-12-31T23:59:60."""
    assert datetime_of(SECOND_2017 - 2) == utc(2016, 12, 31, 23, 59, 59)
    assert datetime_of(SECOND_2017) == utc(2017, 1, 1)
    with pytest.raises(ValueError, match="leap second"):
        datetime_of(SECOND_2017 - 1)


def test_datetime_of_inside_a_leap_second():
    """Test that sub-second marks within 23:59:60 are refused too."""
    millisecond = scale(SECOND_2017 - 1, Lane.SECOND, Lane.MILLISECOND) + 500
    with pytest.raises(ValueError, match="leap second"):
        datetime_of(millisecond, Lane.MILLISECOND)


def test_datetime_of_outside_datetime_range():
    """Test marks in years datetime cannot represent."""
    with pytest.raises(ValueError, match="years 1 to 9999"):
        datetime_of(-800000, Lane.DAY)
    with pytest.raises(ValueError, match="years 1 to 9999"):
        datetime_of(10000, Lane.YEAR)


def test_round_trip_across_new_year_2017():
    """Test mark_of and datetime_of are inverse on every hour around a leap second."""
    start = utc(2016, 12, 30)
    for moment in rrule(HOURLY, dtstart=start, count=24 * 4):
        assert datetime_of(mark_of(moment)) == moment
        assert datetime_of(mark_of(moment, Lane.HOUR), Lane.HOUR) == moment


def test_round_trip_keeps_microseconds():
    """Test that microsecond marks carry the full datetime resolution."""
    moment = utc(2012, 6, 30, 23, 59, 59, 999999)
    mark = mark_of(moment, Lane.MICROSECOND)
    assert datetime_of(mark, Lane.MICROSECOND) == moment
    # The next microsecond falls in the leap second 23:59:60
    with pytest.raises(ValueError, match="leap second"):
        datetime_of(mark + 1, Lane.MICROSECOND)

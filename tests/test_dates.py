from datetime import date, datetime, timedelta, timezone

import pytest

from you_first.dates import daterange, day_key, iso_day, trailing_days
from you_first.errors import InvalidInputError


def test_date_passes_through():
    assert day_key(date(2026, 3, 1)) == date(2026, 3, 1)


def test_naive_datetime_drops_time_of_day():
    assert day_key(datetime(2026, 3, 1, 23, 59, 59)) == date(2026, 3, 1)
    assert day_key(datetime(2026, 3, 1, 0, 0)) == date(2026, 3, 1)


def test_aware_datetime_is_read_in_local_time():
    ts = datetime(2026, 3, 1, 23, 30, tzinfo=timezone.utc)
    assert day_key(ts) == ts.astimezone().date()


def test_iso_strings():
    assert day_key("2026-03-01") == date(2026, 3, 1)
    assert day_key(" 2026-03-01 ") == date(2026, 3, 1)
    assert day_key("2026-03-01T08:15:00") == date(2026, 3, 1)


def test_utc_z_suffix_matches_explicit_offset():
    expected = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc).astimezone().date()
    assert day_key("2026-03-01T12:00:00Z") == expected


@pytest.mark.parametrize("value", [None, "", "not a date", "2026-13-01", 20260301, 1.5, ["2026-03-01"]])
def test_invalid_input(value):
    with pytest.raises(InvalidInputError):
        day_key(value)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        day_key("yesterday")


def test_iso_day():
    assert iso_day(datetime(2026, 3, 1, 18, 0)) == "2026-03-01"


def test_daterange_inclusive():
    days = daterange(date(2026, 2, 27), date(2026, 3, 2))
    assert days == [date(2026, 2, 27), date(2026, 2, 28), date(2026, 3, 1), date(2026, 3, 2)]
    assert daterange(date(2026, 3, 2), date(2026, 3, 1)) == []


def test_trailing_days():
    end = date(2026, 3, 1)
    days = trailing_days(end, 7)
    assert len(days) == 7
    assert days[0] == end - timedelta(days=6)
    assert days[-1] == end
    assert trailing_days(end, 0) == []

from datetime import date, datetime, timedelta, timezone

import pytest

from app.utils.dates import (
    parse_instant,
    to_calendar_date_string,
    to_instant,
    to_iso,
    today_string,
)


def test_instant_is_midday_utc():
    instant = to_instant(2024, 3, 1)
    assert instant == datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    assert to_iso(instant) == "2024-03-01T12:00:00.000Z"


@pytest.mark.parametrize("ymd", [(2024, 1, 1), (2024, 2, 29), (2023, 12, 31), (999, 7, 4)])
def test_calendar_date_round_trip(ymd):
    year, month, day = ymd
    expected = f"{year:04d}-{month:02d}-{day:02d}"
    assert to_calendar_date_string(to_instant(year, month, day)) == expected
    assert to_calendar_date_string(to_iso(to_instant(year, month, day))) == expected


@pytest.mark.parametrize("offset_minutes", [-719, -600, -300, 0, 330, 545, 719])
def test_same_local_day_in_any_timezone(offset_minutes):
    local_zone = timezone(timedelta(minutes=offset_minutes))
    local = to_instant(2024, 3, 1).astimezone(local_zone)
    assert local.date() == date(2024, 3, 1)


def test_calendar_date_uses_utc_component():
    # 23:30 at -05:00 is already the next day in UTC
    stamp = datetime(2024, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert to_calendar_date_string(stamp) == "2024-03-02"
    assert to_calendar_date_string("2024-03-01T23:30:00-05:00") == "2024-03-02"


def test_parse_instant_accepts_z_suffix_and_naive():
    assert parse_instant("2024-03-01T12:00:00.000Z") == to_instant(2024, 3, 1)
    assert parse_instant("2024-03-01T12:00:00") == to_instant(2024, 3, 1)


def test_today_string():
    assert today_string(datetime(2026, 10, 19, 1, 0, tzinfo=timezone.utc)) == "2026-10-19"

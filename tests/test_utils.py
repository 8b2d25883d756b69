from datetime import date, datetime, time, timedelta
from types import SimpleNamespace

from django.utils import timezone

from TeeTimes.utils import (
    course_today,
    format_clock,
    iter_tee_times,
    parse_clock,
    tee_datetime,
    time_until_tee,
)


def test_tee_times_start_at_open_and_stop_before_close():
    times = list(iter_tee_times(time(7, 0), time(8, 0), 15))

    assert times == [time(7, 0), time(7, 15), time(7, 30), time(7, 45)]


def test_tee_times_drop_partial_interval_at_close():
    times = list(iter_tee_times(time(7, 0), time(8, 0), 25))

    assert times == [time(7, 0), time(7, 25), time(7, 50)]


def test_tee_time_generator_restarts_on_each_call():
    first = list(iter_tee_times(time(7, 0), time(19, 0), 15))
    second = list(iter_tee_times(time(7, 0), time(19, 0), 15))

    assert first == second
    assert len(first) == 48


def test_clock_round_trip():
    assert parse_clock(" 07:30 ") == time(7, 30)
    assert format_clock(time(18, 45)) == "18:45"


def test_time_until_tee_uses_course_timezone():
    booking = SimpleNamespace(booking_date=date(2030, 5, 1), tee_time=time(9, 0))
    now = timezone.make_aware(datetime(2030, 4, 30, 9, 0))

    assert time_until_tee(booking, now) == timedelta(hours=24)
    assert tee_datetime(booking.booking_date, booking.tee_time) - now == timedelta(days=1)


def test_course_today_is_local_date():
    now = timezone.make_aware(datetime(2030, 4, 30, 23, 59))

    assert course_today(now) == date(2030, 4, 30)

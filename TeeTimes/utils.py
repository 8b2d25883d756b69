# TeeTimes/utils.py
from datetime import datetime, timedelta, date

from django.utils import timezone


def iter_tee_times(open_time, close_time, interval_minutes):
    """
    Yield tee times from open_time, stepping by interval_minutes,
    stopping once a time reaches close_time.
    Calling again restarts the sequence.
    """
    base_date = date(2000, 1, 1)
    current = datetime.combine(base_date, open_time)
    end = datetime.combine(base_date, close_time)
    step = timedelta(minutes=interval_minutes)

    while current < end:
        yield current.time()
        current += step



def tee_datetime(booking_date, tee_time):
    """Aware datetime of a tee time in the course's timezone."""
    return timezone.make_aware(datetime.combine(booking_date, tee_time))


def course_today(now):
    return timezone.localdate(now)


def time_until_tee(booking, now):
    return tee_datetime(booking.booking_date, booking.tee_time) - now


def parse_clock(value):
    return datetime.strptime(value.strip(), "%H:%M").time()


def format_clock(value):
    return value.strftime("%H:%M")

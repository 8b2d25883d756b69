"""
Course configuration snapshot.

Rates, hours and booking windows are read once per request into an
immutable CourseConfig and passed explicitly to the calculators.
"""
from dataclasses import dataclass
from datetime import time
from decimal import Decimal, InvalidOperation

from django.conf import settings

from . import store
from .exceptions import ConfigurationError
from .utils import iter_tee_times, parse_clock


@dataclass(frozen=True)
class OperatingWindow:
    open_time: time
    close_time: time
    interval_minutes: int

    def __post_init__(self):
        if self.interval_minutes <= 0:
            raise ConfigurationError(
                f"Tee time interval must be positive, got {self.interval_minutes}"
            )
        if self.open_time >= self.close_time:
            raise ConfigurationError(
                f"Course open time {self.open_time} must be before close time {self.close_time}"
            )

    def tee_times(self):
        return iter_tee_times(self.open_time, self.close_time, self.interval_minutes)

    def contains(self, value):
        return any(slot == value for slot in self.tee_times())


@dataclass(frozen=True)
class CourseConfig:
    window: OperatingWindow
    nine_hole_rate: Decimal
    all_day_rate: Decimal
    cart_rental_rate: Decimal
    guest_advance_days: int
    member_advance_days: int
    cancellation_hours: int

    def __post_init__(self):
        for name in ("nine_hole_rate", "all_day_rate", "cart_rental_rate"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} cannot be negative")
        if self.guest_advance_days < 0 or self.cancellation_hours < 0:
            raise ConfigurationError("Booking windows cannot be negative")
        if self.member_advance_days < self.guest_advance_days:
            raise ConfigurationError(
                "Member advance booking window cannot be shorter than the guest window"
            )


def _clock(values, key):
    try:
        return parse_clock(values[key])
    except (KeyError, ValueError, AttributeError):
        raise ConfigurationError(f"Setting {key} must be a HH:MM time, got {values.get(key)!r}")


def _integer(values, key):
    try:
        return int(values[key])
    except (KeyError, ValueError, TypeError):
        raise ConfigurationError(f"Setting {key} must be an integer, got {values.get(key)!r}")


def _money(values, key):
    try:
        return Decimal(str(values[key])).quantize(Decimal("0.01"))
    except (KeyError, InvalidOperation):
        raise ConfigurationError(f"Setting {key} must be a decimal amount, got {values.get(key)!r}")


def build_course_config(overrides=None):
    """Merge overrides over GOLF_COURSE_DEFAULTS and validate the result."""
    values = dict(getattr(settings, "GOLF_COURSE_DEFAULTS", {}))
    values.update(overrides or {})

    window = OperatingWindow(
        open_time=_clock(values, "course_open_time"),
        close_time=_clock(values, "course_close_time"),
        interval_minutes=_integer(values, "tee_time_interval"),
    )

    return CourseConfig(
        window=window,
        nine_hole_rate=_money(values, "green_fee_9_holes"),
        all_day_rate=_money(values, "green_fee_all_day"),
        cart_rental_rate=_money(values, "cart_rental_fee"),
        guest_advance_days=_integer(values, "guest_booking_advance_days"),
        member_advance_days=_integer(values, "member_booking_advance_days"),
        cancellation_hours=_integer(values, "cancellation_notice_hours"),
    )


def load_course_config():
    """Current configuration: CourseSetting rows over the settings defaults."""
    return build_course_config(store.get_settings())

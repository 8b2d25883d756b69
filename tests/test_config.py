from datetime import time
from decimal import Decimal

import pytest

from TeeTimes import store
from TeeTimes.config import build_course_config, load_course_config
from TeeTimes.exceptions import ConfigurationError
from TeeTimes.models import CourseSetting


def test_defaults_build_a_valid_config(config):
    assert config.window.open_time == time(7, 0)
    assert config.window.close_time == time(19, 0)
    assert config.window.interval_minutes == 15
    assert config.nine_hole_rate == Decimal("10.00")
    assert config.all_day_rate == Decimal("15.00")
    assert config.cart_rental_rate == Decimal("15.00")
    assert config.guest_advance_days == 30
    assert config.member_advance_days == 60
    assert config.cancellation_hours == 24


def test_window_contains_only_grid_times(config):
    assert config.window.contains(time(7, 0))
    assert config.window.contains(time(18, 45))
    assert not config.window.contains(time(19, 0))
    assert not config.window.contains(time(9, 7))


@pytest.mark.parametrize(
    "overrides",
    [
        {"tee_time_interval": "0"},
        {"tee_time_interval": "often"},
        {"course_open_time": "19:00", "course_close_time": "07:00"},
        {"course_open_time": "7am"},
        {"green_fee_9_holes": "ten"},
        {"cart_rental_fee": "-1"},
        {"member_booking_advance_days": "10"},
        {"cancellation_notice_hours": "-2"},
    ],
)
def test_malformed_settings_raise_configuration_error(overrides):
    with pytest.raises(ConfigurationError):
        build_course_config(overrides)


@pytest.mark.django_db
def test_stored_settings_override_defaults():
    CourseSetting.objects.create(setting_key="green_fee_9_holes", setting_value="12.50")
    CourseSetting.objects.create(setting_key="course_close_time", setting_value="18:00")

    config = load_course_config()

    assert config.nine_hole_rate == Decimal("12.50")
    assert config.window.close_time == time(18, 0)
    assert config.all_day_rate == Decimal("15.00")


@pytest.mark.django_db
def test_single_setting_lookup_falls_back_to_default():
    CourseSetting.objects.create(setting_key="cancellation_notice_hours", setting_value="48")

    assert store.get_setting("cancellation_notice_hours") == "48"
    assert store.get_setting("course_open_time", "07:00") == "07:00"

from datetime import time, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from Accounts.models import Membership, User
from TeeTimes.config import build_course_config
from TeeTimes.constants import BookingStatus, FeeType, PaymentStatus
from TeeTimes.models import Booking
from TeeTimes.utils import course_today


@pytest.fixture
def config():
    return build_course_config()


@pytest.fixture
def now():
    return timezone.now().replace(second=0, microsecond=0)


@pytest.fixture
def today(now):
    return course_today(now)


@pytest.fixture
def api_client():
    return APIClient()


# ----------------------------------
# USERS
# ----------------------------------
@pytest.fixture
def golfer(db):
    return User.objects.create_user(
        email="golfer@example.com",
        password="fairway-123",
        first_name="Gail",
        last_name="Golfer",
    )


@pytest.fixture
def other_golfer(db):
    return User.objects.create_user(
        email="other@example.com",
        password="fairway-123",
        first_name="Otto",
        last_name="Other",
    )


@pytest.fixture
def club_admin(db):
    return User.objects.create_user(
        email="admin@example.com",
        password="fairway-123",
        first_name="Ada",
        last_name="Admin",
        role=User.ADMIN,
    )


@pytest.fixture
def member(db, today):
    user = User.objects.create_user(
        email="member@example.com",
        password="fairway-123",
        first_name="Max",
        last_name="Member",
    )
    Membership.objects.create(
        user=user,
        membership_type=Membership.SINGLE,
        status=Membership.ACTIVE,
        annual_fee=Decimal("450.00"),
        start_date=today - timedelta(days=30),
        end_date=today + timedelta(days=335),
    )
    return user


# ----------------------------------
# BOOKINGS
# ----------------------------------
@pytest.fixture
def make_booking(db, today):
    """Persist a booking directly, bypassing admission."""

    def _make(**overrides):
        values = {
            "booking_date": today + timedelta(days=5),
            "tee_time": time(10, 0),
            "number_of_players": 2,
            "primary_player_name": "Gail Golfer",
            "primary_player_email": "golfer@example.com",
            "green_fee_type": FeeType.NINE_HOLES,
            "cart_rental": False,
            "total_green_fees": Decimal("20.00"),
            "total_cart_fees": Decimal("0.00"),
            "total_amount": Decimal("20.00"),
            "status": BookingStatus.CONFIRMED,
            "payment_status": PaymentStatus.PENDING,
        }
        values.update(overrides)
        return Booking.objects.create(**values)

    return _make

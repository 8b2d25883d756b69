import logging
from datetime import time, timedelta
from unittest import mock

import pytest
from django.core import mail
from django.db import OperationalError

from TeeTimes import store
from TeeTimes.admission import BookingRequest, admit_booking, cancel_booking
from TeeTimes.constants import BookingStatus, FeeType, PaymentStatus
from TeeTimes.models import Booking
from TeeTimes.payments import PaymentBackend, apply_payment_outcome
from TeeTimes.notifications import NotificationBackend
from TeeTimes.utils import tee_datetime

pytestmark = pytest.mark.django_db


class BrokenPaymentBackend(PaymentBackend):

    def create_intent(self, booking):
        raise ConnectionError("payment provider unreachable")

    def refund(self, booking):
        raise ConnectionError("payment provider unreachable")


class BrokenNotificationBackend(NotificationBackend):

    def send(self, trigger, booking):
        raise ConnectionError("smtp unreachable")


def admit(today, now, config, actor=None, **overrides):
    values = {
        "booking_date": today + timedelta(days=4),
        "tee_time": time(8, 30),
        "number_of_players": 1,
        "green_fee_type": FeeType.NINE_HOLES,
        "primary_player_name": "Gail Golfer",
        "primary_player_email": "golfer@example.com",
    }
    values.update(overrides)
    return admit_booking(BookingRequest(**values), actor, now, config)


# ----------------------------------
# PAYMENTS
# ----------------------------------
def test_payment_success_marks_booking_paid(make_booking):
    booking = make_booking()

    updated = apply_payment_outcome(booking.pk, "succeeded", reference="pi_123")

    booking.refresh_from_db()
    assert updated.payment_status == PaymentStatus.PAID
    assert booking.payment_status == PaymentStatus.PAID
    assert booking.payment_reference == "pi_123"
    assert booking.status == BookingStatus.CONFIRMED


def test_payment_failure_never_cancels_the_booking(make_booking):
    booking = make_booking()

    apply_payment_outcome(booking.pk, "failed")

    booking.refresh_from_db()
    assert booking.payment_status == PaymentStatus.FAILED
    assert booking.status == BookingStatus.CONFIRMED


def test_unknown_payment_outcome(make_booking):
    booking = make_booking()

    with pytest.raises(ValueError):
        apply_payment_outcome(booking.pk, "maybe")


def test_payment_outcome_for_missing_booking():
    assert apply_payment_outcome(9999, "succeeded") is None


def test_broken_payment_backend_does_not_block_admission(settings, config, now, today, caplog):
    settings.GOLF_PAYMENT_BACKEND = "tests.test_collaborators.BrokenPaymentBackend"

    with caplog.at_level(logging.ERROR, logger="TeeTimes.payments"):
        result = admit(today, now, config)

    assert result.ok
    assert result.booking.payment_status == PaymentStatus.PENDING
    assert result.booking.payment_reference == ""
    assert "failed to open payment" in caplog.text


def test_broken_refund_keeps_cancellation(settings, config, make_booking, golfer):
    settings.GOLF_PAYMENT_BACKEND = "tests.test_collaborators.BrokenPaymentBackend"
    booking = make_booking(user=golfer, payment_status=PaymentStatus.PAID)
    now = tee_datetime(booking.booking_date, booking.tee_time) - timedelta(days=3)

    result = cancel_booking(booking.pk, golfer, now, config=config)

    booking.refresh_from_db()
    assert result.ok
    assert booking.status == BookingStatus.CANCELLED
    assert booking.payment_status == PaymentStatus.PAID


# ----------------------------------
# NOTIFICATIONS
# ----------------------------------
def test_confirmation_email_sent(config, now, today):
    result = admit(today, now, config)

    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.subject == "Tee time confirmed"
    assert message.to == ["golfer@example.com"]
    assert "08:30" in message.body
    assert result.booking.booking_date.isoformat() in message.body


def test_cancellation_email_sent(config, make_booking, golfer):
    booking = make_booking(user=golfer)
    now = tee_datetime(booking.booking_date, booking.tee_time) - timedelta(days=3)

    cancel_booking(booking.pk, golfer, now, config=config)

    assert [m.subject for m in mail.outbox] == ["Tee time cancelled"]


def test_opted_out_golfer_gets_no_email(config, now, today, golfer):
    golfer.email_notifications = False
    golfer.save()

    result = admit(today, now, config, actor=golfer)

    assert result.ok
    assert mail.outbox == []


def test_broken_notifier_does_not_undo_booking(settings, config, now, today, caplog):
    settings.GOLF_NOTIFICATION_BACKEND = "tests.test_collaborators.BrokenNotificationBackend"

    with caplog.at_level(logging.ERROR, logger="TeeTimes.notifications"):
        result = admit(today, now, config)

    assert result.ok
    assert result.booking.pk is not None
    assert "Failed to send booking_confirmed notification" in caplog.text


def test_failed_reference_write_keeps_the_booking(config, now, today, caplog):
    with mock.patch.object(
        store, "update_payment_status", side_effect=OperationalError("database is locked")
    ):
        with caplog.at_level(logging.ERROR, logger="TeeTimes.payments"):
            result = admit(today, now, config)

    assert result.ok
    assert Booking.objects.filter(pk=result.booking.pk, status=BookingStatus.CONFIRMED).exists()
    assert result.booking.payment_status == PaymentStatus.PENDING
    assert "failed to open payment" in caplog.text


def test_failed_refund_write_keeps_the_cancellation(config, make_booking, golfer):
    booking = make_booking(user=golfer, payment_status=PaymentStatus.PAID)
    now = tee_datetime(booking.booking_date, booking.tee_time) - timedelta(days=3)

    with mock.patch.object(
        store, "update_payment_status", side_effect=store.StoreUnavailable("timeout")
    ):
        result = cancel_booking(booking.pk, golfer, now, config=config)

    booking.refresh_from_db()
    assert result.ok
    assert booking.status == BookingStatus.CANCELLED
    assert booking.payment_status == PaymentStatus.PAID

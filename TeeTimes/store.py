"""
Record store adapter.

Every read and write the booking core needs from the database goes
through here. `insert_booking_if_slot_free` is the only operation that
has to be atomic: the partial unique index on confirmed
(booking_date, tee_time) decides which of two concurrent admissions wins.
"""
import logging

from django.conf import settings
from django.db import IntegrityError, OperationalError, connection, transaction

from Accounts.models import Membership
from .constants import BookingStatus
from .models import Booking, CourseCondition, CourseSetting

logger = logging.getLogger(__name__)


class SlotConflict(Exception):
    """Another confirmed booking already holds the tee time."""


class StoreUnavailable(Exception):
    """The store timed out or refused the write. Safe for the caller to retry."""


def get_confirmed_tee_times(booking_date):
    return set(
        Booking.objects.filter(
            booking_date=booking_date,
            status=BookingStatus.CONFIRMED,
        ).values_list("tee_time", flat=True)
    )


def get_condition_override(condition_date):
    return CourseCondition.objects.filter(condition_date=condition_date).first()


def get_active_membership(user, as_of):
    if user is None or not user.is_authenticated:
        return None
    return Membership.objects.active_for(user, as_of).order_by("-end_date").first()


def get_setting(key, default=None):
    row = CourseSetting.objects.filter(setting_key=key).first()
    return row.setting_value if row else default


def get_settings():
    return dict(CourseSetting.objects.values_list("setting_key", "setting_value"))


def get_booking(booking_id):
    return Booking.objects.select_related("user").filter(pk=booking_id).first()


def _apply_statement_timeout():
    timeout_ms = getattr(settings, "GOLF_STORE_TIMEOUT_MS", None)
    if timeout_ms and connection.vendor == "postgresql":
        with connection.cursor() as cursor:
            cursor.execute(f"SET LOCAL statement_timeout = {int(timeout_ms)}")


def insert_booking_if_slot_free(booking):
    """
    Insert an unsaved confirmed booking.
    Raises SlotConflict if the tee time is already held, StoreUnavailable
    on timeouts or lost connections.
    """
    try:
        with transaction.atomic():
            _apply_statement_timeout()
            booking.save(force_insert=True)
    except IntegrityError:
        if booking.tee_time in get_confirmed_tee_times(booking.booking_date):
            raise SlotConflict(f"{booking.booking_date} {booking.tee_time}")
        raise
    except OperationalError as exc:
        logger.exception("Booking insert failed for %s %s", booking.booking_date, booking.tee_time)
        raise StoreUnavailable(str(exc)) from exc

    return booking


def update_booking_status(booking, status, timestamp, **fields):
    """
    Compare-and-set transition from the booking's current status.
    Returns False when another writer changed the status first.
    """
    changes = dict(fields, status=status, updated_at=timestamp)
    if status == BookingStatus.CANCELLED:
        changes["cancelled_at"] = timestamp

    try:
        with transaction.atomic():
            _apply_statement_timeout()
            updated = Booking.objects.filter(
                pk=booking.pk,
                status=booking.status,
            ).update(**changes)
    except OperationalError as exc:
        logger.exception("Status update failed for booking %s", booking.pk)
        raise StoreUnavailable(str(exc)) from exc

    if updated:
        for field, value in changes.items():
            setattr(booking, field, value)
    return bool(updated)


def update_booking_fields(booking, timestamp, **fields):
    """Write changed fields of a confirmed booking."""
    try:
        with transaction.atomic():
            _apply_statement_timeout()
            updated = Booking.objects.filter(
                pk=booking.pk,
                status=BookingStatus.CONFIRMED,
            ).update(updated_at=timestamp, **fields)
    except OperationalError as exc:
        logger.exception("Update failed for booking %s", booking.pk)
        raise StoreUnavailable(str(exc)) from exc

    if updated:
        booking.updated_at = timestamp
        for field, value in fields.items():
            setattr(booking, field, value)
    return bool(updated)


def update_payment_status(booking, payment_status, reference=None):
    fields = {"payment_status": payment_status}
    if reference is not None:
        fields["payment_reference"] = reference

    try:
        Booking.objects.filter(pk=booking.pk).update(**fields)
    except OperationalError as exc:
        logger.exception("Payment status update failed for booking %s", booking.pk)
        raise StoreUnavailable(str(exc)) from exc

    for field, value in fields.items():
        setattr(booking, field, value)
    return booking

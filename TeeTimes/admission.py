"""
Booking admission and lifecycle.

admit_booking runs a fixed pipeline and stops at the first failure:

1. structure   - player count, tee time on the grid, fee type
2. window      - not in the past, not beyond the caller's advance window
3. availability - fresh tee sheet for the date
4. pricing     - rates from the configuration snapshot of this call
5. commit      - atomic insert guarded by the confirmed-slot unique index

Every outcome is returned as an AdmissionResult; BookingError instances
are carried in `error`, never raised from here.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import Optional

from slots.services import compute_slots, find_slot
from . import store
from .config import load_course_config
from .constants import BookingStatus, FeeType, PaymentStatus, MIN_PLAYERS, MAX_PLAYERS
from .exceptions import (
    AlreadyBooked,
    BookingError,
    BookingNotFound,
    EntitlementError,
    InvalidTransition,
    NotAuthorized,
    TooLateToCancel,
    TooLateToModify,
    TransientError,
    ValidationFailed,
)
from .models import Booking
from .notifications import BOOKING_CANCELLED, BOOKING_CONFIRMED, notify
from .payments import refund_payment, request_payment
from .permissions import can_manage, is_admin
from .pricing import calculate_booking_price, cart_fee, entitlement_window
from .utils import course_today, time_until_tee

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("cart_rental", "special_requests", "additional_players")
ADMIN_STATUSES = (BookingStatus.COMPLETED, BookingStatus.NO_SHOW)


@dataclass(frozen=True)
class BookingRequest:
    booking_date: date
    tee_time: time
    number_of_players: int
    green_fee_type: str
    primary_player_name: str
    primary_player_email: str
    cart_rental: bool = False
    primary_player_phone: str = ""
    additional_players: list = field(default_factory=list)
    special_requests: str = ""


@dataclass(frozen=True)
class AdmissionResult:
    booking: Optional[Booking] = None
    error: Optional[BookingError] = None

    @property
    def ok(self):
        return self.error is None


def _reject(error, **context):
    logger.info(
        "Booking rejected: %s (%s) %s",
        error.kind, error.message, dict(error.payload, **context),
    )
    return AdmissionResult(error=error)


# -------------------------------------------------------------------
# VALIDATION STEPS
# -------------------------------------------------------------------
def validate_structure(request, config):
    if not MIN_PLAYERS <= request.number_of_players <= MAX_PLAYERS:
        return ValidationFailed(
            f"Number of players must be between {MIN_PLAYERS} and {MAX_PLAYERS}"
        )

    if not config.window.contains(request.tee_time):
        return ValidationFailed(
            f"{request.tee_time:%H:%M} is not a tee time on the course schedule"
        )

    if request.green_fee_type not in dict(FeeType.CHOICES):
        return ValidationFailed(
            f"Green fee type must be {FeeType.NINE_HOLES} or {FeeType.ALL_DAY}"
        )

    return None


def resolve_entitlement(actor, now, config):
    membership = store.get_active_membership(actor, course_today(now))
    return entitlement_window(config, membership is not None)


def check_booking_window(booking_date, now, window):
    today = course_today(now)

    if booking_date < today:
        return EntitlementError(
            "Cannot book tee times in the past",
            limit=window.max_advance_days,
        )

    if booking_date > today + timedelta(days=window.max_advance_days):
        return EntitlementError(
            f"Cannot book more than {window.max_advance_days} days in advance",
            limit=window.max_advance_days,
        )

    return None


def within_notice_window(booking, now, config):
    return time_until_tee(booking, now) < timedelta(hours=config.cancellation_hours)


# -------------------------------------------------------------------
# ADMISSION
# -------------------------------------------------------------------
def admit_booking(request, actor, now, config=None):
    config = config or load_course_config()

    error = validate_structure(request, config)
    if error:
        return _reject(error)

    window = resolve_entitlement(actor, now, config)
    error = check_booking_window(request.booking_date, now, window)
    if error:
        return _reject(error, member=window.is_member)

    slots = compute_slots(
        request.booking_date,
        config.window,
        store.get_condition_override(request.booking_date),
        store.get_confirmed_tee_times(request.booking_date),
    )
    slot = find_slot(slots, request.tee_time)
    if not slot.available:
        return _reject(AlreadyBooked(cause=slot.reason), date=str(request.booking_date))

    price = calculate_booking_price(
        config,
        request.green_fee_type,
        request.number_of_players,
        request.cart_rental,
    )

    booking = Booking(
        user=actor if actor is not None and actor.is_authenticated else None,
        booking_date=request.booking_date,
        tee_time=request.tee_time,
        number_of_players=request.number_of_players,
        primary_player_name=request.primary_player_name,
        primary_player_email=request.primary_player_email,
        primary_player_phone=request.primary_player_phone,
        additional_players=list(request.additional_players),
        special_requests=request.special_requests,
        cart_rental=request.cart_rental,
        green_fee_type=request.green_fee_type,
        total_green_fees=price.green_fees,
        total_cart_fees=price.cart_fees,
        total_amount=price.total,
        status=BookingStatus.CONFIRMED,
        payment_status=PaymentStatus.PENDING if price.total > 0 else PaymentStatus.PAID,
    )

    try:
        store.insert_booking_if_slot_free(booking)
    except store.SlotConflict:
        logger.warning(
            "Lost race for tee time %s %s",
            request.booking_date, request.tee_time,
        )
        return AdmissionResult(error=AlreadyBooked(cause="race"))
    except store.StoreUnavailable:
        return AdmissionResult(error=TransientError())

    logger.info(
        "Booking %s confirmed for %s %s (%s players, total %s)",
        booking.pk, booking.booking_date, booking.tee_time,
        booking.number_of_players, booking.total_amount,
    )

    request_payment(booking)
    notify(BOOKING_CONFIRMED, booking)

    return AdmissionResult(booking=booking)


# -------------------------------------------------------------------
# LIFECYCLE
# -------------------------------------------------------------------
def _load_managed_booking(booking_id, actor):
    booking = store.get_booking(booking_id)
    if booking is None:
        return None, BookingNotFound()

    if not can_manage(actor, booking):
        return None, NotAuthorized()

    return booking, None


def cancel_booking(booking_id, actor, now, reason="", config=None):
    booking, error = _load_managed_booking(booking_id, actor)
    if error:
        return _reject(error, booking=booking_id)

    if not BookingStatus.can_transition(booking.status, BookingStatus.CANCELLED):
        return _reject(
            InvalidTransition(f"A {booking.status} booking cannot be cancelled"),
            booking=booking_id,
        )

    config = config or load_course_config()
    if within_notice_window(booking, now, config):
        return _reject(
            TooLateToCancel(
                f"Cannot cancel booking within {config.cancellation_hours} hours of tee time"
            ),
            booking=booking_id,
        )

    try:
        changed = store.update_booking_status(
            booking, BookingStatus.CANCELLED, now, cancellation_reason=reason or ""
        )
    except store.StoreUnavailable:
        return AdmissionResult(error=TransientError())

    if not changed:
        return _reject(
            InvalidTransition("Booking status changed concurrently"),
            booking=booking_id,
        )

    logger.info("Booking %s cancelled", booking.pk)

    refund_payment(booking)
    notify(BOOKING_CANCELLED, booking)

    return AdmissionResult(booking=booking)


def update_booking(booking_id, actor, changes, now, config=None):
    """
    Partial update of cart rental, special requests or additional players.
    Held to the same notice window as cancellation.
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        return _reject(ValidationFailed(f"Fields cannot be updated: {', '.join(sorted(unknown))}"))

    booking, error = _load_managed_booking(booking_id, actor)
    if error:
        return _reject(error, booking=booking_id)

    if booking.status != BookingStatus.CONFIRMED:
        return _reject(
            InvalidTransition(f"A {booking.status} booking cannot be modified"),
            booking=booking_id,
        )

    config = config or load_course_config()
    if within_notice_window(booking, now, config):
        return _reject(
            TooLateToModify(
                f"Cannot modify booking within {config.cancellation_hours} hours of tee time"
            ),
            booking=booking_id,
        )

    fields = dict(changes)
    if "cart_rental" in fields:
        fields["total_cart_fees"] = cart_fee(config, fields["cart_rental"])
        fields["total_amount"] = booking.total_green_fees + fields["total_cart_fees"]

    # A free booking that picks up a charge goes back to pending payment
    became_chargeable = (
        booking.payment_status == PaymentStatus.PAID
        and booking.total_amount == 0
        and fields.get("total_amount", 0) > 0
    )
    if became_chargeable:
        fields["payment_status"] = PaymentStatus.PENDING

    try:
        changed = store.update_booking_fields(booking, now, **fields)
    except store.StoreUnavailable:
        return AdmissionResult(error=TransientError())

    if not changed:
        return _reject(
            InvalidTransition("Booking status changed concurrently"),
            booking=booking_id,
        )

    logger.info("Booking %s updated: %s", booking.pk, ", ".join(sorted(changes)))
    if became_chargeable:
        request_payment(booking)
    return AdmissionResult(booking=booking)


def mark_booking_status(booking_id, actor, status, now):
    """Admin close-out of a played (completed) or missed (no_show) tee time."""
    if not is_admin(actor):
        return _reject(NotAuthorized("Admin access required"), booking=booking_id)

    if status not in ADMIN_STATUSES:
        return _reject(ValidationFailed(f"Status must be one of: {', '.join(ADMIN_STATUSES)}"))

    booking = store.get_booking(booking_id)
    if booking is None:
        return _reject(BookingNotFound(), booking=booking_id)

    if not BookingStatus.can_transition(booking.status, status):
        return _reject(
            InvalidTransition(f"Cannot move a {booking.status} booking to {status}"),
            booking=booking_id,
        )

    try:
        changed = store.update_booking_status(booking, status, now)
    except store.StoreUnavailable:
        return AdmissionResult(error=TransientError())

    if not changed:
        return _reject(InvalidTransition("Booking status changed concurrently"), booking=booking_id)

    logger.info("Booking %s marked %s", booking.pk, status)
    return AdmissionResult(booking=booking)

"""
Payment collaborator.

Admission never waits on payment: the backend is told about the amount
after the booking is committed, and its asynchronous outcome only moves
`payment_status`.
"""
import logging

from django.conf import settings
from django.utils.module_loading import import_string

from . import store
from .constants import PaymentStatus

logger = logging.getLogger(__name__)


class PaymentBackend:

    def create_intent(self, booking):
        """Open a payment for booking.total_amount; return a provider reference."""
        raise NotImplementedError

    def refund(self, booking):
        """Refund a paid booking; return True when the refund was accepted."""
        raise NotImplementedError


class DeferredPaymentBackend(PaymentBackend):
    """
    Payment is collected at the pro shop.
    Hands out a local reference and records refunds without a provider.
    """

    def create_intent(self, booking):
        reference = f"tt_{booking.pk}"
        logger.info(
            "Payment of %s deferred for booking %s (%s)",
            booking.total_amount, booking.pk, reference,
        )
        return reference

    def refund(self, booking):
        logger.info("Refund of %s recorded for booking %s", booking.total_amount, booking.pk)
        return True


def get_payment_backend():
    return import_string(settings.GOLF_PAYMENT_BACKEND)()


OUTCOME_STATUS = {
    "succeeded": PaymentStatus.PAID,
    "failed": PaymentStatus.FAILED,
    "refunded": PaymentStatus.REFUNDED,
}


def request_payment(booking):
    """
    Open a payment intent and store its reference.
    Runs after commit; any failure is logged and the booking stands.
    """
    if booking.payment_status != PaymentStatus.PENDING:
        return booking

    try:
        reference = get_payment_backend().create_intent(booking)
        store.update_payment_status(booking, booking.payment_status, reference=reference or "")
    except Exception:
        logger.exception("Payment backend failed to open payment for booking %s", booking.pk)

    return booking


def refund_payment(booking):
    if booking.payment_status != PaymentStatus.PAID:
        return booking

    try:
        if get_payment_backend().refund(booking):
            store.update_payment_status(booking, PaymentStatus.REFUNDED)
    except Exception:
        logger.exception("Payment backend failed to refund booking %s", booking.pk)

    return booking


def apply_payment_outcome(booking_id, outcome, reference=None):
    """
    Record an asynchronous payment result.
    Only payment_status moves; the booking status is never touched.
    """
    try:
        payment_status = OUTCOME_STATUS[outcome]
    except KeyError:
        raise ValueError(f"Unknown payment outcome: {outcome}")

    booking = store.get_booking(booking_id)
    if booking is None:
        logger.warning("Payment outcome %s for unknown booking %s", outcome, booking_id)
        return None

    logger.info("Booking %s payment %s -> %s", booking.pk, booking.payment_status, payment_status)
    return store.update_payment_status(booking, payment_status, reference=reference)

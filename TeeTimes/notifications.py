"""
Notification collaborator.

Fire-and-forget: a failed notification is logged and the booking stands.
"""
import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils.module_loading import import_string

from .utils import format_clock

logger = logging.getLogger(__name__)

BOOKING_CONFIRMED = "booking_confirmed"
BOOKING_CANCELLED = "booking_cancelled"

SUBJECTS = {
    BOOKING_CONFIRMED: "Tee time confirmed",
    BOOKING_CANCELLED: "Tee time cancelled",
}


class NotificationBackend:

    def send(self, trigger, booking):
        raise NotImplementedError


class EmailNotificationBackend(NotificationBackend):

    def send(self, trigger, booking):
        if booking.user is not None and not booking.user.email_notifications:
            return

        send_mail(
            subject=SUBJECTS[trigger],
            message=(
                f"{SUBJECTS[trigger]}: {booking.booking_date:%Y-%m-%d} at "
                f"{format_clock(booking.tee_time)} for {booking.number_of_players} player(s)."
            ),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[booking.primary_player_email],
        )


def get_notification_backend():
    return import_string(settings.GOLF_NOTIFICATION_BACKEND)()


def notify(trigger, booking):
    try:
        get_notification_backend().send(trigger, booking)
    except Exception:
        logger.exception("Failed to send %s notification for booking %s", trigger, booking.pk)

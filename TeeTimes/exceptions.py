import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Course configuration is malformed. Halts the request."""


# -------------------------------------------------------------------
# BOOKING ERRORS
# Returned by the admission/cancellation services, raised by views
# -------------------------------------------------------------------
class BookingError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "BookingError"
    default_detail = "Booking request rejected"

    def __init__(self, detail=None, **payload):
        super().__init__(detail)
        self.payload = payload

    @property
    def message(self):
        return str(self.detail)


class ValidationFailed(BookingError):
    kind = "ValidationError"
    default_detail = "Invalid booking request"


class EntitlementError(BookingError):
    kind = "EntitlementError"
    default_detail = "Date is outside the advance booking window"

    @property
    def limit(self):
        return self.payload.get("limit")


class AlreadyBooked(BookingError):
    status_code = status.HTTP_409_CONFLICT
    kind = "AlreadyBooked"
    default_detail = "This tee time is already booked"

    def __init__(self, cause=None):
        # Same message whatever the cause
        super().__init__(None, cause=cause)

    @property
    def cause(self):
        return self.payload.get("cause")


class TooLateToCancel(BookingError):
    kind = "TooLateToCancel"
    default_detail = "Cannot cancel booking within the cancellation notice window"


class TooLateToModify(BookingError):
    kind = "TooLateToModify"
    default_detail = "Cannot modify booking within the cancellation notice window"


class TransientError(BookingError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    kind = "Transient"
    default_detail = "Booking store is temporarily unavailable, please retry"


class NotAuthorized(BookingError):
    status_code = status.HTTP_403_FORBIDDEN
    kind = "NotAuthorized"
    default_detail = "Not authorized to access this booking"


class BookingNotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "NotFound"
    default_detail = "Booking not found"


class InvalidTransition(BookingError):
    status_code = status.HTTP_409_CONFLICT
    kind = "InvalidTransition"
    default_detail = "Booking status cannot change"


def _first_message(detail):
    if isinstance(detail, dict):
        field, errors = next(iter(detail.items()))
        message = _first_message(errors)
        return message if field == api_settings.NON_FIELD_ERRORS_KEY else f"{field}: {message}"
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else "Invalid request"
    return str(detail)


def booking_exception_handler(exc, context):
    if isinstance(exc, BookingError):
        return Response(
            {"status": "failed", "error": exc.kind, "message": exc.message},
            status=exc.status_code,
        )

    # Request-shape failures share the booking error body; field details ride along
    if isinstance(exc, ValidationError):
        return Response(
            {
                "status": "failed",
                "error": ValidationFailed.kind,
                "message": _first_message(exc.detail),
                "errors": exc.detail,
            },
            status=exc.status_code,
        )

    if isinstance(exc, ConfigurationError):
        logger.error("Course configuration error: %s", exc)
        return Response(
            {"status": "failed", "error": "ConfigurationError", "message": str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return exception_handler(exc, context)

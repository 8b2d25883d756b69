from datetime import time, timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from TeeTimes.constants import BookingStatus, CourseState
from TeeTimes.models import Booking, CourseCondition, CourseSetting

pytestmark = pytest.mark.django_db


def local_today():
    return timezone.localdate()


def booking_payload(days_ahead=3, **overrides):
    payload = {
        "booking_date": (local_today() + timedelta(days=days_ahead)).isoformat(),
        "tee_time": "10:00",
        "number_of_players": 2,
        "green_fee_type": "9_holes",
        "primary_player_name": "Gail Golfer",
        "primary_player_email": "golfer@example.com",
    }
    payload.update(overrides)
    return payload


# ----------------------------------
# TEE SHEET
# ----------------------------------
def test_tee_sheet_lists_48_slots(api_client):
    day = local_today() + timedelta(days=2)

    response = api_client.get(reverse("tee-sheet"), {"date": day.isoformat()})

    assert response.status_code == 200
    assert response.data["date"] == day.isoformat()
    assert len(response.data["time_slots"]) == 48
    assert response.data["time_slots"][0] == {"time": "07:00", "available": True}
    assert response.data["time_slots"][-1]["time"] == "18:45"


def test_tee_sheet_marks_booked_slot(api_client, make_booking):
    day = local_today() + timedelta(days=2)
    make_booking(booking_date=day, tee_time=time(9, 0))

    response = api_client.get(reverse("tee-sheet"), {"date": day.isoformat()})

    slots = {slot["time"]: slot["available"] for slot in response.data["time_slots"]}
    assert slots["09:00"] is False
    assert sum(not available for available in slots.values()) == 1


def test_tee_sheet_closed_course(api_client):
    day = local_today() + timedelta(days=2)
    CourseCondition.objects.create(condition_date=day, overall_condition=CourseState.CLOSED)

    response = api_client.get(reverse("tee-sheet"), {"date": day.isoformat()})

    assert response.data["course_condition"] == "closed"
    assert not any(slot["available"] for slot in response.data["time_slots"])


def test_tee_sheet_requires_a_date(api_client):
    response = api_client.get(reverse("tee-sheet"))

    assert response.status_code == 400


# ----------------------------------
# CREATE
# ----------------------------------
def test_guest_creates_booking(api_client):
    response = api_client.post(reverse("booking-create"), booking_payload(), format="json")

    assert response.status_code == 201
    assert response.data["status"] == "success"
    assert response.data["payment_required"] is True
    assert response.data["data"]["tee_time"] == "10:00"
    assert response.data["data"]["total_amount"] == "20.00"
    assert response.data["data"]["user_id"] is None


def test_second_booking_for_same_slot_conflicts(api_client):
    api_client.post(reverse("booking-create"), booking_payload(), format="json")

    response = api_client.post(
        reverse("booking-create"),
        booking_payload(primary_player_email="rival@example.com"),
        format="json",
    )

    assert response.status_code == 409
    assert response.data == {
        "status": "failed",
        "error": "AlreadyBooked",
        "message": "This tee time is already booked",
    }
    assert Booking.objects.count() == 1


def test_guest_cannot_book_31_days_ahead(api_client):
    response = api_client.post(
        reverse("booking-create"), booking_payload(days_ahead=31), format="json"
    )

    assert response.status_code == 400
    assert response.data["error"] == "EntitlementError"


def test_member_books_31_days_ahead(api_client, member):
    api_client.force_authenticate(user=member)
    payload = booking_payload(days_ahead=31)
    del payload["primary_player_name"]
    del payload["primary_player_email"]

    response = api_client.post(reverse("booking-create"), payload, format="json")

    assert response.status_code == 201
    assert response.data["data"]["user_id"] == member.pk
    assert response.data["data"]["primary_player_email"] == member.email
    assert response.data["data"]["primary_player_name"] == "Max Member"


def test_guest_must_give_contact_details(api_client):
    payload = booking_payload()
    del payload["primary_player_email"]

    response = api_client.post(reverse("booking-create"), payload, format="json")

    assert response.status_code == 400
    assert response.data["error"] == "ValidationError"
    assert "primary_player_email" in response.data["errors"]


def test_too_many_players_is_a_validation_error(api_client):
    response = api_client.post(
        reverse("booking-create"), booking_payload(number_of_players=5), format="json"
    )

    assert response.status_code == 400
    assert response.data["error"] == "ValidationError"


@pytest.mark.parametrize("tee_time", ["07:05", "25:00"])
def test_bad_tee_time_carries_error_kind(api_client, tee_time):
    response = api_client.post(
        reverse("booking-create"), booking_payload(tee_time=tee_time), format="json"
    )

    assert response.status_code == 400
    assert response.data["status"] == "failed"
    assert response.data["error"] == "ValidationError"
    assert response.data["message"]


def test_missing_player_count_carries_error_kind(api_client):
    payload = booking_payload()
    del payload["number_of_players"]

    response = api_client.post(reverse("booking-create"), payload, format="json")

    assert response.status_code == 400
    assert response.data["error"] == "ValidationError"
    assert response.data["message"].startswith("number_of_players: ")
    assert "number_of_players" in response.data["errors"]


def test_tee_sheet_without_date_carries_error_kind(api_client):
    response = api_client.get(reverse("tee-sheet"))

    assert response.data["error"] == "ValidationError"
    assert "date" in response.data["errors"]


# ----------------------------------
# READ
# ----------------------------------
def test_owner_reads_booking(api_client, make_booking, golfer):
    booking = make_booking(user=golfer)
    api_client.force_authenticate(user=golfer)

    response = api_client.get(reverse("booking-detail", args=[booking.pk]))

    assert response.status_code == 200
    assert response.data["data"]["id"] == booking.pk


def test_stranger_cannot_read_member_booking(api_client, make_booking, golfer, other_golfer):
    booking = make_booking(user=golfer)
    api_client.force_authenticate(user=other_golfer)

    response = api_client.get(reverse("booking-detail", args=[booking.pk]))

    assert response.status_code == 403
    assert response.data["error"] == "NotAuthorized"


def test_guest_booking_is_readable_by_id(api_client, make_booking):
    booking = make_booking(user=None)

    response = api_client.get(reverse("booking-detail", args=[booking.pk]))

    assert response.status_code == 200


def test_missing_booking_is_404(api_client):
    response = api_client.get(reverse("booking-detail", args=[9999]))

    assert response.status_code == 404
    assert response.data["error"] == "NotFound"


def test_my_bookings_lists_upcoming_only(api_client, make_booking, golfer):
    make_booking(user=golfer, booking_date=local_today() + timedelta(days=2))
    make_booking(user=golfer, booking_date=local_today() - timedelta(days=2))
    make_booking(user=None, booking_date=local_today() + timedelta(days=2), tee_time=time(11, 0))
    api_client.force_authenticate(user=golfer)

    response = api_client.get(reverse("booking-mine"))

    assert response.status_code == 200
    assert len(response.data["data"]) == 1


def test_all_bookings_is_admin_only(api_client, make_booking, golfer, club_admin):
    make_booking()

    api_client.force_authenticate(user=golfer)
    assert api_client.get(reverse("booking-all")).status_code == 403

    api_client.force_authenticate(user=club_admin)
    response = api_client.get(reverse("booking-all"))
    assert response.status_code == 200
    assert response.data["count"] == 1


# ----------------------------------
# UPDATE / CANCEL / STATUS
# ----------------------------------
def test_owner_adds_cart(api_client, make_booking, golfer):
    booking = make_booking(user=golfer)
    api_client.force_authenticate(user=golfer)

    response = api_client.patch(
        reverse("booking-detail", args=[booking.pk]), {"cart_rental": True}, format="json"
    )

    assert response.status_code == 200
    assert response.data["data"]["total_amount"] == "35.00"


def test_patch_rejects_protected_fields(api_client, make_booking, golfer):
    booking = make_booking(user=golfer)
    api_client.force_authenticate(user=golfer)

    response = api_client.patch(
        reverse("booking-detail", args=[booking.pk]), {"tee_time": "11:00"}, format="json"
    )

    assert response.status_code == 400


def test_owner_cancels_booking(api_client, make_booking, golfer):
    booking = make_booking(user=golfer)
    api_client.force_authenticate(user=golfer)

    response = api_client.delete(
        reverse("booking-detail", args=[booking.pk]),
        {"cancellation_reason": "Work"},
        format="json",
    )

    assert response.status_code == 200
    assert response.data["data"]["status"] == BookingStatus.CANCELLED
    booking.refresh_from_db()
    assert booking.cancellation_reason == "Work"


def test_cancel_within_notice_window_rejected(api_client, make_booking, golfer):
    soon = timezone.localtime() + timedelta(hours=3)
    booking = make_booking(
        user=golfer, booking_date=soon.date(), tee_time=time(soon.hour, 0)
    )
    api_client.force_authenticate(user=golfer)

    response = api_client.delete(reverse("booking-detail", args=[booking.pk]))

    assert response.status_code == 400
    assert response.data["error"] == "TooLateToCancel"


def test_cancel_requires_login(api_client, make_booking):
    booking = make_booking(user=None)

    response = api_client.delete(reverse("booking-detail", args=[booking.pk]))

    assert response.status_code == 401


def test_admin_marks_no_show(api_client, make_booking, club_admin):
    booking = make_booking()
    api_client.force_authenticate(user=club_admin)

    response = api_client.post(
        reverse("booking-status", args=[booking.pk]), {"status": "no_show"}, format="json"
    )

    assert response.status_code == 200
    assert response.data["data"]["status"] == BookingStatus.NO_SHOW


# ----------------------------------
# ACCOUNTS
# ----------------------------------
def test_register_and_login(api_client):
    response = api_client.post(
        reverse("register"),
        {
            "first_name": "Nina",
            "last_name": "New",
            "email": "nina@example.com",
            "password": "long-enough-1",
        },
        format="json",
    )
    assert response.status_code == 201
    assert response.data["data"]["token"]

    response = api_client.post(
        reverse("login"),
        {"email": "nina@example.com", "password": "long-enough-1"},
        format="json",
    )
    assert response.status_code == 200
    assert response.data["access"]
    assert response.data["user"]["role"] == "customer"


def test_profile_shows_active_membership(api_client, member):
    api_client.force_authenticate(user=member)

    response = api_client.get(reverse("profile"))

    assert response.status_code == 200
    assert response.data["data"]["membership"]["status"] == "active"


def test_malformed_course_setting_halts_the_request(api_client):
    CourseSetting.objects.create(setting_key="tee_time_interval", setting_value="0")

    response = api_client.get(reverse("tee-sheet"), {"date": local_today().isoformat()})

    assert response.status_code == 500
    assert response.data["error"] == "ConfigurationError"

from rest_framework.permissions import BasePermission


class Capability:
    OWNER = "owner"
    ADMIN = "admin"
    NONE = "none"


def is_admin(actor):
    return bool(
        actor is not None
        and actor.is_authenticated
        and getattr(actor, "is_admin", False)
    )


def capability(actor, booking):
    """
    What the actor may do with the booking.
    Admin wins over ownership so admin paths behave the same on own bookings.
    """
    if is_admin(actor):
        return Capability.ADMIN

    if (
        actor is not None
        and actor.is_authenticated
        and booking.user_id is not None
        and booking.user_id == actor.pk
    ):
        return Capability.OWNER

    return Capability.NONE


def can_manage(actor, booking):
    return capability(actor, booking) != Capability.NONE


def can_view(actor, booking):
    # Guest bookings are readable by whoever holds the id
    return booking.user_id is None or can_manage(actor, booking)


class IsClubAdmin(BasePermission):
    message = "Admin access required"

    def has_permission(self, request, view):
        return is_admin(request.user)

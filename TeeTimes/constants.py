# TeeTimes/constants.py
class BookingStatus:
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"

    CHOICES = (
        (CONFIRMED, "Confirmed"),
        (CANCELLED, "Cancelled"),
        (COMPLETED, "Completed"),
        (NO_SHOW, "No Show"),
    )

    # confirmed is the only non-terminal state
    TRANSITIONS = {
        CONFIRMED: {CANCELLED, COMPLETED, NO_SHOW},
        CANCELLED: set(),
        COMPLETED: set(),
        NO_SHOW: set(),
    }

    @classmethod
    def can_transition(cls, current, target):
        return target in cls.TRANSITIONS.get(current, set())


class PaymentStatus:
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"

    CHOICES = (
        (PENDING, "Pending"),
        (PAID, "Paid"),
        (FAILED, "Failed"),
        (REFUNDED, "Refunded"),
    )


class FeeType:
    NINE_HOLES = "9_holes"
    ALL_DAY = "all_day"

    CHOICES = (
        (NINE_HOLES, "9 Holes"),
        (ALL_DAY, "All Day"),
    )


class CourseState:
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CLOSED = "closed"

    SURFACE_CHOICES = (
        (EXCELLENT, "Excellent"),
        (GOOD, "Good"),
        (FAIR, "Fair"),
        (POOR, "Poor"),
    )

    CHOICES = SURFACE_CHOICES + ((CLOSED, "Closed"),)


MIN_PLAYERS = 1
MAX_PLAYERS = 4
MAX_HOLES = 9

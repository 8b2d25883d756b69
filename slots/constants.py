# slots/constants.py
class SlotReason:
    BOOKED = "booked"
    CLOSED = "closed"
    NO_HOLES = "no_holes"


DEFAULT_COURSE_CONDITION = "good"
DEFAULT_HOLES_AVAILABLE = 9

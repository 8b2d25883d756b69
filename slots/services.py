from dataclasses import dataclass
from datetime import time
from typing import Optional

from TeeTimes import store
from TeeTimes.constants import CourseState
from TeeTimes.utils import format_clock
from .constants import SlotReason, DEFAULT_COURSE_CONDITION, DEFAULT_HOLES_AVAILABLE


@dataclass(frozen=True)
class Slot:
    time: time
    available: bool
    reason: Optional[str] = None


def closure_reason(condition):
    """Why a condition override blocks the whole day, or None."""
    if condition is None:
        return None
    if condition.overall_condition == CourseState.CLOSED:
        return SlotReason.CLOSED
    if condition.holes_available == 0:
        return SlotReason.NO_HOLES
    return None


def resolve_slot(slot_time, booked_times, day_closure):
    if day_closure:
        return Slot(slot_time, False, day_closure)

    if slot_time in booked_times:
        return Slot(slot_time, False, SlotReason.BOOKED)

    return Slot(slot_time, True)


def compute_slots(slot_date, window, condition, booked_times):
    """
    Tee sheet for one date, ascending by time.

    Pure: the caller supplies the operating window, the condition override
    (or None) and the confirmed tee times for the date. Past dates produce
    the same list as future ones.
    """
    booked_times = frozenset(booked_times)
    day_closure = closure_reason(condition)

    return [
        resolve_slot(slot_time, booked_times, day_closure)
        for slot_time in window.tee_times()
    ]


def find_slot(slots, slot_time):
    for slot in slots:
        if slot.time == slot_time:
            return slot
    return None


def build_tee_sheet(selected_date, config):
    condition = store.get_condition_override(selected_date)
    booked_times = store.get_confirmed_tee_times(selected_date)

    slots = compute_slots(selected_date, config.window, condition, booked_times)

    return {
        "date": selected_date.isoformat(),
        "course_condition": (
            condition.overall_condition if condition else DEFAULT_COURSE_CONDITION
        ),
        "holes_available": (
            condition.holes_available if condition else DEFAULT_HOLES_AVAILABLE
        ),
        "time_slots": [
            {"time": format_clock(slot.time), "available": slot.available}
            for slot in slots
        ],
    }

from dataclasses import dataclass
from decimal import Decimal

from .constants import FeeType


@dataclass(frozen=True)
class EntitlementWindow:
    max_advance_days: int
    is_member: bool


@dataclass(frozen=True)
class PriceBreakdown:
    green_fees: Decimal
    cart_fees: Decimal

    @property
    def total(self):
        return self.green_fees + self.cart_fees


def entitlement_window(config, is_member):
    if is_member:
        return EntitlementWindow(config.member_advance_days, True)
    return EntitlementWindow(config.guest_advance_days, False)


def green_fee_rate(config, fee_type):
    if fee_type == FeeType.NINE_HOLES:
        return config.nine_hole_rate
    if fee_type == FeeType.ALL_DAY:
        return config.all_day_rate
    raise ValueError(f"Unknown green fee type: {fee_type}")


def cart_fee(config, cart_rental):
    return config.cart_rental_rate if cart_rental else Decimal("0.00")


def calculate_booking_price(config, fee_type, number_of_players, cart_rental):
    """
    Green fee is charged per player, cart rental once per booking.
    Rates come from the snapshot taken at commit time.
    """
    return PriceBreakdown(
        green_fees=green_fee_rate(config, fee_type) * number_of_players,
        cart_fees=cart_fee(config, cart_rental),
    )

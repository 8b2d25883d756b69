from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .constants import BookingStatus, FeeType, PaymentStatus, CourseState, MIN_PLAYERS, MAX_PLAYERS

# =========================
# COURSE CONFIGURATION
# =========================

class CourseSetting(models.Model):
    """
    Runtime course configuration (rates, hours, booking windows).
    Keys missing here fall back to settings.GOLF_COURSE_DEFAULTS.
    """
    setting_key = models.CharField(max_length=100, unique=True)
    setting_value = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.setting_key}={self.setting_value}"


class CourseCondition(models.Model):
    """
    Per-date override of course availability.
    Closed course or zero holes blocks every tee time on that date.
    """
    condition_date = models.DateField(unique=True)

    overall_condition = models.CharField(
        max_length=20,
        choices=CourseState.CHOICES,
        default=CourseState.GOOD
    )

    holes_available = models.PositiveSmallIntegerField(default=9)

    # Descriptive details shown to golfers
    greens_condition = models.CharField(
        max_length=20, choices=CourseState.SURFACE_CHOICES, blank=True
    )
    fairways_condition = models.CharField(
        max_length=20, choices=CourseState.SURFACE_CHOICES, blank=True
    )
    cart_availability = models.BooleanField(default=True)
    weather_impact = models.TextField(blank=True)
    maintenance_activities = models.TextField(blank=True)
    special_notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["condition_date"]
        constraints = [
            models.CheckConstraint(
                condition=Q(holes_available__lte=9),
                name="course_condition_holes_0_9",
            ),
        ]

    @property
    def blocks_play(self):
        return (
            self.overall_condition == CourseState.CLOSED
            or self.holes_available == 0
        )

    def __str__(self):
        return f"{self.condition_date} | {self.overall_condition} | {self.holes_available} holes"


# =========================
# BOOKING MODEL
# =========================

class Booking(models.Model):
    """
    One tee-time reservation.
    Never deleted; status only moves forward from CONFIRMED.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings"
    )

    booking_date = models.DateField()
    tee_time = models.TimeField()
    number_of_players = models.PositiveSmallIntegerField()

    # Player information
    primary_player_name = models.CharField(max_length=200)
    primary_player_email = models.EmailField()
    primary_player_phone = models.CharField(max_length=20, blank=True)
    additional_players = models.JSONField(default=list, blank=True)
    special_requests = models.TextField(blank=True)

    cart_rental = models.BooleanField(default=False)
    green_fee_type = models.CharField(max_length=20, choices=FeeType.CHOICES)

    # Pricing breakdown (snapshotted at booking time)
    total_green_fees = models.DecimalField(max_digits=10, decimal_places=2)
    total_cart_fees = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)

    status = models.CharField(
        max_length=20,
        choices=BookingStatus.CHOICES,
        default=BookingStatus.CONFIRMED
    )

    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.CHOICES,
        default=PaymentStatus.PENDING
    )

    # Reference handed back by the payment backend
    payment_reference = models.CharField(max_length=255, blank=True)

    cancellation_reason = models.TextField(blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["booking_date", "tee_time"]
        indexes = [
            models.Index(fields=["booking_date", "tee_time"], name="booking_date_time_idx"),
            models.Index(fields=["user", "booking_date"], name="booking_user_date_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]
        constraints = [
            # At most one confirmed booking per tee time
            models.UniqueConstraint(
                fields=["booking_date", "tee_time"],
                condition=Q(status=BookingStatus.CONFIRMED),
                name="unique_confirmed_tee_time",
            ),
            models.CheckConstraint(
                condition=(
                    Q(number_of_players__gte=MIN_PLAYERS)
                    & Q(number_of_players__lte=MAX_PLAYERS)
                ),
                name="booking_players_1_4",
            ),
        ]

    def clean(self):
        if not MIN_PLAYERS <= (self.number_of_players or 0) <= MAX_PLAYERS:
            raise ValidationError(
                f"Number of players must be between {MIN_PLAYERS} and {MAX_PLAYERS}"
            )

        if self.total_amount != self.total_green_fees + self.total_cart_fees:
            raise ValidationError("Total amount must equal green fees plus cart fees")

    def __str__(self):
        return f"{self.booking_date} {self.tee_time:%H:%M} | {self.primary_player_name} | {self.status}"

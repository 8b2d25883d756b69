# TeeTimes/admin.py

from django import forms
from django.contrib import admin
from django.core.exceptions import ValidationError

from . import store
from .config import build_course_config
from .exceptions import ConfigurationError
from .models import Booking, CourseCondition, CourseSetting


# -------------------------------
# COURSE SETTING ADMIN
# -------------------------------
# Rates, hours and booking windows.
# Each save is checked against the full configuration it would produce.
class CourseSettingForm(forms.ModelForm):
    class Meta:
        model = CourseSetting
        fields = "__all__"

    def clean(self):
        cleaned = super().clean()
        key = cleaned.get("setting_key")
        value = cleaned.get("setting_value")

        if key and value is not None:
            values = store.get_settings()
            values[key] = value
            try:
                build_course_config(values)
            except ConfigurationError as exc:
                raise ValidationError(str(exc))

        return cleaned


@admin.register(CourseSetting)
class CourseSettingAdmin(admin.ModelAdmin):
    form = CourseSettingForm
    list_display = ("setting_key", "setting_value", "updated_at")
    search_fields = ("setting_key",)
    ordering = ("setting_key",)


# -------------------------------
# COURSE CONDITION ADMIN
# -------------------------------
# Per-date closures and reduced-hole days
@admin.register(CourseCondition)
class CourseConditionAdmin(admin.ModelAdmin):
    list_display = (
        "condition_date",
        "overall_condition",
        "holes_available",
        "cart_availability",
    )
    list_filter = ("overall_condition", "cart_availability")
    date_hierarchy = "condition_date"
    ordering = ("-condition_date",)


# -------------------------------
# BOOKING ADMIN
# -------------------------------
@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "booking_date",
        "tee_time",
        "primary_player_name",
        "number_of_players",
        "green_fee_type",
        "total_amount",
        "status",
        "payment_status",
    )

    list_filter = (
        "status",
        "payment_status",
        "green_fee_type",
        "booking_date",
    )

    search_fields = (
        "primary_player_name",
        "primary_player_email",
        "user__email",
    )

    date_hierarchy = "booking_date"

    # Status and money only change through the booking services
    readonly_fields = (
        "booking_date",
        "tee_time",
        "total_green_fees",
        "total_cart_fees",
        "total_amount",
        "status",
        "cancelled_at",
        "created_at",
        "updated_at",
    )

    # ---------------------------------
    # HARD SAFETY RULES
    # ---------------------------------
    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

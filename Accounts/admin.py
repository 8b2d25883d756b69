from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import BaseUserCreationForm
from django.forms import ModelForm
from django.utils import timezone

from .models import Membership, User


# ----------------------------------
# GOLFER FORMS
# ----------------------------------
class GolferChangeForm(ModelForm):
    class Meta:
        model = User
        fields = "__all__"


class GolferCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ("email", "first_name", "last_name", "role")


class MembershipInline(admin.TabularInline):
    model = Membership
    extra = 0
    fields = ("membership_type", "status", "start_date", "end_date", "annual_fee", "auto_renew")
    ordering = ("-end_date",)


# ----------------------------------
# GOLFERS AND CLUB ADMINS
# ----------------------------------
@admin.register(User)
class GolferAdmin(BaseUserAdmin):
    form = GolferChangeForm
    add_form = GolferCreationForm
    inlines = [MembershipInline]

    list_display = ("email", "full_name", "role", "member_until", "email_notifications", "is_active")
    list_filter = ("role", "is_active", "email_notifications")
    search_fields = ("email", "first_name", "last_name", "phone_number")
    ordering = ("last_name", "first_name")

    fieldsets = (
        ("Login", {"fields": ("email", "password", "last_login")}),
        ("Golfer", {"fields": (("first_name", "last_name"), "phone_number", "email_notifications")}),
        ("Club access", {"fields": ("role", "is_active", "is_staff", "is_superuser", "groups")}),
        ("Joined", {"fields": ("created_at",)}),
    )
    add_fieldsets = (
        ("New golfer", {
            "classes": ("wide",),
            "fields": ("email", "first_name", "last_name", "role", "password1", "password2"),
        }),
    )
    readonly_fields = ("created_at", "last_login")
    filter_horizontal = ("groups",)

    @admin.display(description="Member until")
    def member_until(self, user):
        membership = (
            Membership.objects
            .active_for(user, timezone.localdate())
            .order_by("-end_date")
            .first()
        )
        return membership.end_date if membership else None


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "membership_type", "status", "start_date", "end_date", "auto_renew")
    list_filter = ("membership_type", "status", "auto_renew")
    list_editable = ("status",)
    search_fields = ("user__email", "user__last_name")
    date_hierarchy = "end_date"
    autocomplete_fields = ("user",)

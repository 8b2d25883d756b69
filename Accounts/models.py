# Accounts/models.py

from django.db import models
from django.contrib.auth.models import (
    AbstractBaseUser,
    PermissionsMixin,
    BaseUserManager,
)

# ----------------------------------
# CUSTOM USER MANAGER
# ----------------------------------
# Creates golfers and club administrators.
# Email is the login identifier for both.
class UserManager(BaseUserManager):

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")

        email = self.normalize_email(email)
        extra_fields.setdefault("role", User.CUSTOMER)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email, password, **extra_fields)


# ----------------------------------
# CUSTOM USER MODEL
# ----------------------------------
class User(AbstractBaseUser, PermissionsMixin):

    CUSTOMER = "customer"
    ADMIN = "admin"

    ROLE_CHOICES = (
        (CUSTOMER, "Customer"),
        (ADMIN, "Admin"),
    )

    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    phone_number = models.CharField(max_length=20, blank=True)

    # Notification preferences
    email_notifications = models.BooleanField(default=True)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=CUSTOMER)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    objects = UserManager()

    created_at = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self):
        return self.role == self.ADMIN or self.is_staff

    def __str__(self):
        return self.email


# ----------------------------------
# MEMBERSHIP
# ----------------------------------
class MembershipQuerySet(models.QuerySet):

    def active_for(self, user, as_of):
        """
        Memberships that grant member privileges on `as_of`.
        Status must be active AND the membership must not have ended.
        """
        return self.filter(
            user=user,
            status=Membership.ACTIVE,
            end_date__gte=as_of,
        )


class Membership(models.Model):
    """
    Annual club membership.
    Active members get the longer advance-booking window.
    """

    SINGLE = "single"
    FAMILY = "family"
    STUDENT = "student"
    ALUMNI = "alumni"

    TYPE_CHOICES = [
        (SINGLE, "Single"),
        (FAMILY, "Family"),
        (STUDENT, "Student"),
        (ALUMNI, "Alumni"),
    ]

    ACTIVE = "active"
    EXPIRED = "expired"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (ACTIVE, "Active"),
        (EXPIRED, "Expired"),
        (SUSPENDED, "Suspended"),
        (CANCELLED, "Cancelled"),
    ]

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="memberships"
    )

    membership_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=ACTIVE)

    annual_fee = models.DecimalField(max_digits=10, decimal_places=2)
    auto_renew = models.BooleanField(default=True)

    start_date = models.DateField()
    end_date = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MembershipQuerySet.as_manager()

    class Meta:
        indexes = [
            models.Index(fields=["user", "status"], name="membership_user_status_idx"),
            models.Index(fields=["end_date"], name="membership_end_date_idx"),
        ]

    def __str__(self):
        return f"{self.user} | {self.membership_type} | {self.status}"

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CourseSetting",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("setting_key", models.CharField(max_length=100, unique=True)),
                ("setting_value", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="CourseCondition",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("condition_date", models.DateField(unique=True)),
                (
                    "overall_condition",
                    models.CharField(
                        choices=[
                            ("excellent", "Excellent"),
                            ("good", "Good"),
                            ("fair", "Fair"),
                            ("poor", "Poor"),
                            ("closed", "Closed"),
                        ],
                        default="good",
                        max_length=20,
                    ),
                ),
                ("holes_available", models.PositiveSmallIntegerField(default=9)),
                (
                    "greens_condition",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("excellent", "Excellent"),
                            ("good", "Good"),
                            ("fair", "Fair"),
                            ("poor", "Poor"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "fairways_condition",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("excellent", "Excellent"),
                            ("good", "Good"),
                            ("fair", "Fair"),
                            ("poor", "Poor"),
                        ],
                        max_length=20,
                    ),
                ),
                ("cart_availability", models.BooleanField(default=True)),
                ("weather_impact", models.TextField(blank=True)),
                ("maintenance_activities", models.TextField(blank=True)),
                ("special_notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["condition_date"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(holes_available__lte=9),
                        name="course_condition_holes_0_9",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_date", models.DateField()),
                ("tee_time", models.TimeField()),
                ("number_of_players", models.PositiveSmallIntegerField()),
                ("primary_player_name", models.CharField(max_length=200)),
                ("primary_player_email", models.EmailField(max_length=254)),
                ("primary_player_phone", models.CharField(blank=True, max_length=20)),
                ("additional_players", models.JSONField(blank=True, default=list)),
                ("special_requests", models.TextField(blank=True)),
                ("cart_rental", models.BooleanField(default=False)),
                (
                    "green_fee_type",
                    models.CharField(
                        choices=[("9_holes", "9 Holes"), ("all_day", "All Day")],
                        max_length=20,
                    ),
                ),
                ("total_green_fees", models.DecimalField(decimal_places=2, max_digits=10)),
                ("total_cart_fees", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("confirmed", "Confirmed"),
                            ("cancelled", "Cancelled"),
                            ("completed", "Completed"),
                            ("no_show", "No Show"),
                        ],
                        default="confirmed",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("paid", "Paid"),
                            ("failed", "Failed"),
                            ("refunded", "Refunded"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("payment_reference", models.CharField(blank=True, max_length=255)),
                ("cancellation_reason", models.TextField(blank=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["booking_date", "tee_time"],
                "indexes": [
                    models.Index(fields=["booking_date", "tee_time"], name="booking_date_time_idx"),
                    models.Index(fields=["user", "booking_date"], name="booking_user_date_idx"),
                    models.Index(fields=["status"], name="booking_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(status="confirmed"),
                        fields=("booking_date", "tee_time"),
                        name="unique_confirmed_tee_time",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(number_of_players__gte=1) & models.Q(number_of_players__lte=4),
                        name="booking_players_1_4",
                    ),
                ],
            },
        ),
    ]

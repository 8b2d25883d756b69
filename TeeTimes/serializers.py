from rest_framework import serializers

from .admission import BookingRequest, UPDATABLE_FIELDS
from .models import Booking


# =========================================================
# BOOKING READ SERIALIZER
# =========================================================
class BookingSerializer(serializers.ModelSerializer):

    tee_time = serializers.TimeField(format="%H:%M", read_only=True)
    user_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_id",
            "booking_date",
            "tee_time",
            "number_of_players",
            "primary_player_name",
            "primary_player_email",
            "primary_player_phone",
            "additional_players",
            "special_requests",
            "cart_rental",
            "green_fee_type",
            "total_green_fees",
            "total_cart_fees",
            "total_amount",
            "status",
            "payment_status",
            "cancellation_reason",
            "cancelled_at",
            "created_at",
        ]
        read_only_fields = fields


# =========================================================
# BOOKING CREATE
# Shape checks only; booking rules live in admission.py
# =========================================================
class BookingCreateSerializer(serializers.Serializer):
    booking_date = serializers.DateField()
    tee_time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"])
    number_of_players = serializers.IntegerField()
    green_fee_type = serializers.CharField()
    cart_rental = serializers.BooleanField(default=False)

    primary_player_name = serializers.CharField(
        min_length=2, max_length=200, required=False
    )
    primary_player_email = serializers.EmailField(required=False)
    primary_player_phone = serializers.CharField(
        max_length=20, required=False, allow_blank=True, default=""
    )
    additional_players = serializers.ListField(
        child=serializers.DictField(), required=False, default=list
    )
    special_requests = serializers.CharField(
        required=False, allow_blank=True, default=""
    )

    def validate(self, data):
        request = self.context.get("request")
        user = getattr(request, "user", None)

        # Signed-in golfers default to their own contact details
        if user is not None and user.is_authenticated:
            data.setdefault("primary_player_name", user.full_name or user.email)
            data.setdefault("primary_player_email", user.email)

        missing = [
            name for name in ("primary_player_name", "primary_player_email")
            if not data.get(name)
        ]
        if missing:
            raise serializers.ValidationError(
                {name: "This field is required." for name in missing}
            )

        return data

    def to_booking_request(self):
        return BookingRequest(**self.validated_data)


# =========================================================
# BOOKING UPDATE / CANCEL / STATUS
# =========================================================
class BookingUpdateSerializer(serializers.Serializer):
    cart_rental = serializers.BooleanField(required=False)
    special_requests = serializers.CharField(required=False, allow_blank=True)
    additional_players = serializers.ListField(
        child=serializers.DictField(), required=False
    )

    def validate(self, data):
        unknown = set(self.initial_data) - set(UPDATABLE_FIELDS)
        if unknown:
            raise serializers.ValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}"
            )
        if not data:
            raise serializers.ValidationError("No changes supplied")
        return data


class BookingCancelSerializer(serializers.Serializer):
    cancellation_reason = serializers.CharField(
        required=False, allow_blank=True, default=""
    )


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class BookingListQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)

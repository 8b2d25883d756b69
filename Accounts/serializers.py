# Accounts/serializers.py
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import Membership

User = get_user_model()


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)

    class Meta:
        model = User
        fields = (
            "first_name",
            "last_name",
            "email",
            "password",
            "phone_number",
            "email_notifications",
        )

    def create(self, validated_data):
        password = validated_data.pop("password")
        return User.objects.create_user(
            password=password, role=User.CUSTOMER, **validated_data
        )


class MembershipSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Membership
        fields = ("id", "membership_type", "status", "start_date", "end_date")


class ProfileSerializer(serializers.ModelSerializer):
    membership = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "first_name",
            "last_name",
            "phone_number",
            "email_notifications",
            "role",
            "created_at",
            "membership",
        )

    def get_membership(self, user):
        membership = (
            Membership.objects
            .active_for(user, timezone.localdate())
            .order_by("-end_date")
            .first()
        )
        return MembershipSummarySerializer(membership).data if membership else None


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["first_name", "last_name", "phone_number", "email_notifications"]

    def validate_phone_number(self, value):
        if value and len(value) < 10:
            raise serializers.ValidationError("Invalid phone number")
        return value


class LoginSerializer(TokenObtainPairSerializer):

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = user.role
        token["email"] = user.email
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = ProfileSerializer(self.user).data
        return data

"""Serializers for staff booking management and the public booking form."""

from __future__ import annotations

from typing import Any

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.exceptions import ServiceError
from shared.validators import is_valid_phone, mask_phone, validate_phone, validate_wechat

from .models import Booking
from .services import status_text


class BookingSerializer(serializers.ModelSerializer):
    adult_count = serializers.IntegerField(read_only=True)
    balance_due = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    order_id = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_code",
            "customer_name",
            "customer_phone",
            "customer_wechat",
            "customer_id",
            "visit_date",
            "people_count",
            "child_count",
            "adult_count",
            "hotel_id",
            "hotel_name",
            "room_number",
            "package_id",
            "package_name",
            "unit_price",
            "child_price",
            "total_amount",
            "deposit_amount",
            "deposit_collector",
            "deposit_paid_at",
            "balance_due",
            "customer_notes",
            "operator_notes",
            "source",
            "status",
            "order_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_order_id(self, obj: Booking) -> int | None:
        order = getattr(obj, "order", None)
        return order.id if order else None


class BookingCreateSerializer(serializers.Serializer):
    """Booking entered by an operator, e.g. from a phone call."""

    customer_name = serializers.CharField(max_length=100)
    customer_phone = serializers.CharField(max_length=20, validators=[validate_phone])
    customer_wechat = serializers.CharField(
        max_length=50, required=False, allow_blank=True, default="", validators=[validate_wechat]
    )
    visit_date = serializers.DateField()
    people_count = serializers.IntegerField(min_value=1)
    child_count = serializers.IntegerField(min_value=0, default=0)
    hotel_name = serializers.CharField(max_length=100)
    hotel_id = serializers.IntegerField(required=False, allow_null=True)
    room_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    package_id = serializers.IntegerField(required=False, allow_null=True)
    customer_notes = serializers.CharField(required=False, allow_blank=True, default="")
    operator_notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs["child_count"] > attrs["people_count"]:
            raise serializers.ValidationError({"child_count": "Children cannot outnumber the group."})
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    # unknown values are reported as INVALID_STATUS by the service
    status = serializers.CharField()
    operator_notes = serializers.CharField(required=False, allow_blank=True)


class BookingDepositSerializer(serializers.Serializer):
    deposit_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    deposit_collector = serializers.CharField(max_length=50, required=False, allow_blank=True)


class PublicBookingSerializer(serializers.Serializer):
    """
    Public form payload.

    Missing or malformed fields fail as ``VALIDATION_ERROR``; the business
    checks in ``validate`` raise their own codes so the form can show a
    precise message.
    """

    customer_name = serializers.CharField(max_length=100)
    customer_phone = serializers.CharField(max_length=20)
    customer_wechat = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    visit_date = serializers.DateField()
    people_count = serializers.IntegerField()
    child_count = serializers.IntegerField(required=False, default=0)
    hotel_name = serializers.CharField(max_length=100)
    hotel_id = serializers.IntegerField(required=False, allow_null=True)
    room_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    package_id = serializers.IntegerField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if not is_valid_phone(attrs["customer_phone"]):
            raise ServiceError("Please enter a valid 11 digit mobile number.", code="INVALID_PHONE")
        if attrs["visit_date"] < timezone.localdate():
            raise ServiceError("The visit date cannot be in the past.", code="INVALID_DATE")
        max_people = settings.PUBLIC_BOOKING_MAX_PEOPLE
        if not 1 <= attrs["people_count"] <= max_people:
            raise ServiceError(f"People count must be between 1 and {max_people}.", code="INVALID_PEOPLE_COUNT")
        if not 0 <= attrs["child_count"] <= attrs["people_count"]:
            raise ServiceError("Child count must be between 0 and the people count.", code="INVALID_CHILD_COUNT")
        return attrs


class PublicBookingStatusSerializer(serializers.ModelSerializer):
    customer_phone = serializers.SerializerMethodField()
    status_text = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "booking_code",
            "customer_name",
            "customer_phone",
            "visit_date",
            "people_count",
            "child_count",
            "hotel_name",
            "package_name",
            "unit_price",
            "child_price",
            "total_amount",
            "deposit_amount",
            "status",
            "status_text",
            "created_at",
        ]

    def get_customer_phone(self, obj: Booking) -> str:
        return mask_phone(obj.customer_phone)

    def get_status_text(self, obj: Booking) -> str:
        return status_text(obj.status)

"""Serializers for the shuttle API."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.exceptions import ConflictError
from shared.validators import validate_phone

from .models import Driver, ShuttleSchedule, ShuttleStop, Vehicle

User = get_user_model()


class VehicleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vehicle
        fields = ["id", "plate_number", "vehicle_type", "seats", "status", "notes", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]
        extra_kwargs = {
            # uniqueness is reported as DUPLICATE_PLATE_NUMBER by ``validate`` below
            "plate_number": {"validators": []},
            "seats": {"min_value": 1},
        }

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        plate_number = attrs.get("plate_number")
        if plate_number:
            clash = Vehicle.objects.filter(plate_number=plate_number)
            if self.instance is not None:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise ConflictError("A vehicle with this plate number already exists.", code="DUPLICATE_PLATE_NUMBER")
        return attrs


class DriverSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(max_length=20, validators=[validate_phone])
    user_id = serializers.PrimaryKeyRelatedField(
        source="user", queryset=User.objects.all(), required=False, allow_null=True
    )

    class Meta:
        model = Driver
        fields = ["id", "name", "phone", "status", "user_id", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]


class ShuttleStopSerializer(serializers.ModelSerializer):
    accommodation_place_name = serializers.CharField(source="accommodation_place.name", read_only=True)

    class Meta:
        model = ShuttleStop
        fields = ["id", "accommodation_place_id", "accommodation_place_name", "stop_order", "passenger_count"]


class ShuttleScheduleSerializer(serializers.ModelSerializer):
    vehicle = VehicleSerializer(read_only=True)
    driver = DriverSerializer(read_only=True)
    stops = ShuttleStopSerializer(many=True, read_only=True)
    passenger_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = ShuttleSchedule
        fields = [
            "id",
            "date",
            "batch_name",
            "vehicle",
            "driver",
            "departure_time",
            "return_time",
            "status",
            "notes",
            "stops",
            "passenger_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StopInputSerializer(serializers.Serializer):
    accommodation_place_id = serializers.IntegerField()
    stop_order = serializers.IntegerField(min_value=1, required=False)
    passenger_count = serializers.IntegerField(min_value=0)


class ShuttleScheduleCreateSerializer(serializers.Serializer):
    date = serializers.DateField()
    batch_name = serializers.CharField(max_length=50)
    vehicle_id = serializers.IntegerField()
    driver_id = serializers.IntegerField()
    departure_time = serializers.TimeField()
    return_time = serializers.TimeField(required=False, allow_null=True)
    stops = StopInputSerializer(many=True, allow_empty=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ShuttleStatusSerializer(serializers.Serializer):
    # unknown values are reported as INVALID_STATUS by the service
    status = serializers.CharField()
    return_time = serializers.TimeField(required=False, allow_null=True)

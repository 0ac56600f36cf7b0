"""Serializers for accommodation places."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import AccommodationPlace
from .services import area_for


class AccommodationPlaceSerializer(serializers.ModelSerializer):
    class Meta:
        model = AccommodationPlace
        fields = [
            "id",
            "name",
            "type",
            "address",
            "distance",
            "duration",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]
        extra_kwargs = {"distance": {"min_value": 0}}


class PublicHotelSerializer(serializers.ModelSerializer):
    area = serializers.SerializerMethodField()

    class Meta:
        model = AccommodationPlace
        fields = ["id", "name", "type", "address", "area"]

    def get_area(self, obj: AccommodationPlace) -> str:
        return area_for(obj)

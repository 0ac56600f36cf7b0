"""Serializers for packages, package items and price quotes."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.projects.serializers import ProjectShortSerializer

from .models import Package
from .services import resolve_projects, set_package_projects


def _savings(obj: Package) -> tuple[Decimal, Decimal, int]:
    total = sum((item.project.price for item in obj.items.all()), Decimal("0"))
    savings = total - obj.price
    if savings <= 0:
        return total, Decimal("0"), 0
    return total, savings, round(savings / total * 100)


class PackageSerializer(serializers.ModelSerializer):
    project_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), write_only=True, required=False
    )
    projects = serializers.SerializerMethodField()
    total_project_value = serializers.SerializerMethodField()
    savings = serializers.SerializerMethodField()
    savings_percent = serializers.SerializerMethodField()

    class Meta:
        model = Package
        fields = [
            "id",
            "name",
            "description",
            "price",
            "child_price",
            "special_pricing",
            "min_people",
            "is_active",
            "show_in_booking_form",
            "sort_order",
            "project_ids",
            "projects",
            "total_project_value",
            "savings",
            "savings_percent",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]
        extra_kwargs = {
            "price": {"min_value": 0},
            "child_price": {"min_value": 0},
        }

    def get_projects(self, obj: Package) -> list[dict[str, Any]]:
        return ProjectShortSerializer([item.project for item in obj.items.all()], many=True).data

    def get_total_project_value(self, obj: Package) -> Decimal:
        return _savings(obj)[0]

    def get_savings(self, obj: Package) -> Decimal:
        return _savings(obj)[1]

    def get_savings_percent(self, obj: Package) -> int:
        return _savings(obj)[2]

    def validate_special_pricing(self, value: Any) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise serializers.ValidationError("Expected an object keyed by date range.")
        for date_range, pricing in value.items():
            start, sep, end = str(date_range).partition("~")
            try:
                valid_range = bool(sep) and date.fromisoformat(start) <= date.fromisoformat(end)
            except ValueError:
                valid_range = False
            if not valid_range:
                raise serializers.ValidationError(f"Invalid date range {date_range!r}, expected YYYY-MM-DD~YYYY-MM-DD.")
            if not isinstance(pricing, dict) or "price" not in pricing:
                raise serializers.ValidationError(f"Range {date_range!r} must define a price.")
        return value

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]) -> Package:
        project_ids = validated_data.pop("project_ids", None)
        projects = resolve_projects(project_ids) if project_ids else []
        package = Package.objects.create(**validated_data)
        set_package_projects(package, projects)
        return package

    @transaction.atomic
    def update(self, instance: Package, validated_data: dict[str, Any]) -> Package:
        project_ids = validated_data.pop("project_ids", None)
        projects = resolve_projects(project_ids) if project_ids else []
        package = super().update(instance, validated_data)
        if project_ids is not None:
            set_package_projects(package, projects)
        return package


class PackageDetailSerializer(PackageSerializer):
    total_duration = serializers.SerializerMethodField()

    class Meta(PackageSerializer.Meta):
        fields = PackageSerializer.Meta.fields + ["total_duration"]

    def get_total_duration(self, obj: Package) -> int:
        return sum(item.project.duration or 0 for item in obj.items.all())


class PackageItemAddSerializer(serializers.Serializer):
    project_id = serializers.IntegerField(min_value=1)


class CalculatePriceSerializer(serializers.Serializer):
    package_id = serializers.IntegerField(required=False, allow_null=True)
    extra_project_ids = serializers.ListField(child=serializers.IntegerField(), required=False, default=list)
    custom_project_ids = serializers.ListField(child=serializers.IntegerField(), required=False, default=list)
    people_count = serializers.IntegerField(min_value=1, default=1)


class PublicPackageSerializer(serializers.ModelSerializer):
    projects = serializers.SerializerMethodField()

    class Meta:
        model = Package
        fields = ["id", "name", "description", "price", "child_price", "min_people", "projects"]

    def get_projects(self, obj: Package) -> list[dict[str, Any]]:
        return [
            {
                "id": item.project.id,
                "name": item.project.name,
                "description": item.project.description,
                "duration": item.project.duration,
            }
            for item in obj.items.all()
        ]

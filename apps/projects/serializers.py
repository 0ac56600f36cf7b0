"""Serializers for activity projects."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Project


class ProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = [
            "id",
            "name",
            "description",
            "price",
            "unit",
            "season",
            "duration",
            "capacity",
            "is_active",
            "sort_order",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]
        extra_kwargs = {"price": {"min_value": 0}}


class ProjectShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ["id", "name", "price", "unit", "duration"]


class PublicProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ["id", "name", "description", "price", "unit", "season", "duration"]

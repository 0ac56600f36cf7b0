"""Serializers for coaches and activity schedules."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.validators import validate_phone

from .models import Coach, DailySchedule

User = get_user_model()


class CoachSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(max_length=20, validators=[validate_phone])
    user_id = serializers.PrimaryKeyRelatedField(
        source="user", queryset=User.objects.all(), required=False, allow_null=True
    )

    class Meta:
        model = Coach
        fields = ["id", "name", "phone", "specialties", "status", "user_id", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]

    def validate_specialties(self, value: Any) -> list[str]:
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Specialties must be a list of strings.")
        return value


class CoachShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coach
        fields = ["id", "name", "phone"]


class DailyScheduleSerializer(serializers.ModelSerializer):
    project = serializers.SerializerMethodField()
    coach = CoachShortSerializer(read_only=True)

    class Meta:
        model = DailySchedule
        fields = [
            "id",
            "date",
            "project",
            "coach",
            "order_item_id",
            "start_time",
            "end_time",
            "participant_count",
            "status",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_project(self, obj: DailySchedule) -> dict[str, Any]:
        project = obj.project
        return {"id": project.id, "name": project.name, "duration": project.duration, "capacity": project.capacity}


class TimelineScheduleSerializer(serializers.ModelSerializer):
    coach = CoachShortSerializer(read_only=True)

    class Meta:
        model = DailySchedule
        fields = ["id", "start_time", "end_time", "participant_count", "coach", "status", "notes", "order_item_id"]


class TimeRangeMixin:
    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        start, end = attrs.get("start_time"), attrs.get("end_time")
        if start is not None and end is not None and start >= end:
            raise serializers.ValidationError({"end_time": "Must be after start_time."})
        return attrs


class ScheduleCreateSerializer(TimeRangeMixin, serializers.Serializer):
    date = serializers.DateField()
    project_id = serializers.IntegerField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    participant_count = serializers.IntegerField(min_value=1)
    coach_id = serializers.IntegerField(required=False, allow_null=True)
    order_item_id = serializers.IntegerField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    skip_conflict_check = serializers.BooleanField(required=False, default=False)


class ScheduleUpdateSerializer(TimeRangeMixin, serializers.Serializer):
    start_time = serializers.TimeField(required=False)
    end_time = serializers.TimeField(required=False)
    coach_id = serializers.IntegerField(required=False, allow_null=True)
    participant_count = serializers.IntegerField(required=False, min_value=1)
    status = serializers.CharField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    skip_conflict_check = serializers.BooleanField(required=False, default=False)


class ConflictCheckSerializer(TimeRangeMixin, serializers.Serializer):
    date = serializers.DateField()
    project_id = serializers.IntegerField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    participant_count = serializers.IntegerField(min_value=1)
    coach_id = serializers.IntegerField(required=False, allow_null=True)
    exclude_id = serializers.IntegerField(required=False, allow_null=True)


class ScheduleStatusSerializer(serializers.Serializer):
    # unknown values are reported as INVALID_STATUS by the service
    status = serializers.CharField()

"""Admin registration for coaches and schedules."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Coach, DailySchedule


@admin.register(Coach)
class CoachAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "status", "user")
    list_filter = ("status",)
    search_fields = ("name", "phone")


@admin.register(DailySchedule)
class DailyScheduleAdmin(admin.ModelAdmin):
    list_display = ("date", "start_time", "end_time", "project", "coach", "participant_count", "status")
    list_filter = ("status", "date", "project")
    raw_id_fields = ("order_item",)

"""Admin registration for the shuttle app."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Driver, ShuttleSchedule, ShuttleStop, Vehicle


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("plate_number", "vehicle_type", "seats", "status")
    list_filter = ("status", "vehicle_type")
    search_fields = ("plate_number",)


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "status", "user")
    list_filter = ("status",)
    search_fields = ("name", "phone")


class ShuttleStopInline(admin.TabularInline):
    model = ShuttleStop
    extra = 0
    autocomplete_fields = ("accommodation_place",)


@admin.register(ShuttleSchedule)
class ShuttleScheduleAdmin(admin.ModelAdmin):
    list_display = ("date", "batch_name", "vehicle", "driver", "departure_time", "status")
    list_filter = ("status", "date")
    search_fields = ("batch_name", "vehicle__plate_number", "driver__name")
    inlines = [ShuttleStopInline]

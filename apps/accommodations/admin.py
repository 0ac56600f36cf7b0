"""Admin registration for accommodation places."""

from __future__ import annotations

from django.contrib import admin

from .models import AccommodationPlace


@admin.register(AccommodationPlace)
class AccommodationPlaceAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "distance", "duration", "is_active")
    list_filter = ("type", "is_active")
    search_fields = ("name", "address")

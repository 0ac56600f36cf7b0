"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "customer_name",
        "customer_phone",
        "visit_date",
        "people_count",
        "hotel_name",
        "package_name",
        "total_amount",
        "deposit_amount",
        "status",
        "source",
        "created_at",
    )
    list_filter = ("status", "source", "visit_date")
    search_fields = ("booking_code", "customer_name", "customer_phone")
    readonly_fields = ("booking_code", "created_at", "updated_at")
    raw_id_fields = ("customer", "hotel", "package")

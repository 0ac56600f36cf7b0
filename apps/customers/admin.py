"""Admin registration for customers."""

from __future__ import annotations

from django.contrib import admin

from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "source", "visit_count", "total_spent", "last_visit_date", "created_at")
    list_filter = ("source",)
    search_fields = ("name", "phone", "wechat")
    readonly_fields = ("total_spent", "visit_count", "first_visit_date", "last_visit_date", "created_at", "updated_at")

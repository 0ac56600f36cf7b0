"""Admin registration for projects."""

from __future__ import annotations

from django.contrib import admin

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "unit", "season", "capacity", "is_active", "sort_order")
    list_filter = ("season", "unit", "is_active")
    search_fields = ("name",)
    list_editable = ("sort_order", "is_active")

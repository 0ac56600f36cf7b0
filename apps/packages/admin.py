"""Admin registration for packages."""

from __future__ import annotations

from django.contrib import admin

from .models import Package, PackageItem


class PackageItemInline(admin.TabularInline):
    model = PackageItem
    extra = 0
    autocomplete_fields = ("project",)


@admin.register(Package)
class PackageAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "child_price", "min_people", "is_active", "show_in_booking_form", "sort_order")
    list_filter = ("is_active", "show_in_booking_form")
    search_fields = ("name",)
    inlines = [PackageItemInline]

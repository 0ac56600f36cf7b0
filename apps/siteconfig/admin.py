"""Admin registration for site settings."""

from __future__ import annotations

from django.contrib import admin

from .models import SiteConfig


@admin.register(SiteConfig)
class SiteConfigAdmin(admin.ModelAdmin):
    list_display = ("key", "label", "group", "updated_at")
    list_filter = ("group",)
    search_fields = ("key", "label")

"""Admin registration for orders."""

from __future__ import annotations

from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("project", "quantity", "unit_price", "subtotal")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_number",
        "customer",
        "visit_date",
        "people_count",
        "total_amount",
        "paid_amount",
        "status",
        "payment_status",
    )
    list_filter = ("status", "payment_status", "visit_date")
    search_fields = ("order_number", "customer__name", "customer__phone")
    readonly_fields = ("order_number", "created_at", "updated_at")
    raw_id_fields = ("customer", "booking")
    inlines = [OrderItemInline]

"""Serializers for customer endpoints."""

from __future__ import annotations

from typing import Any

from rest_framework import serializers  # type: ignore

from shared.exceptions import ConflictError
from shared.validators import validate_phone

from .models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "phone",
            "wechat",
            "source",
            "tags",
            "notes",
            "first_visit_date",
            "last_visit_date",
            "total_spent",
            "visit_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "first_visit_date",
            "last_visit_date",
            "total_spent",
            "visit_count",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            # uniqueness is reported as DUPLICATE_PHONE by ``validate`` below
            "phone": {"validators": [validate_phone]},
        }

    def validate_tags(self, value: Any) -> list[str]:
        if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
            raise serializers.ValidationError("Tags must be a list of strings.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        phone = attrs.get("phone")
        if phone:
            clash = Customer.objects.filter(phone=phone)
            if self.instance is not None:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise ConflictError("A customer with this phone already exists.", code="DUPLICATE_PHONE")
        return attrs


class CustomerShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "phone"]


class CustomerDetailSerializer(CustomerSerializer):
    recent_orders = serializers.SerializerMethodField()

    class Meta(CustomerSerializer.Meta):
        fields = CustomerSerializer.Meta.fields + ["recent_orders"]

    def get_recent_orders(self, obj: Customer) -> list[dict[str, Any]]:
        orders = obj.orders.select_related("accommodation_place").order_by("-created_at")[:10]
        return [
            {
                "id": order.id,
                "order_number": order.order_number,
                "visit_date": order.visit_date,
                "people_count": order.people_count,
                "total_amount": order.total_amount,
                "status": order.status,
                "payment_status": order.payment_status,
                "accommodation_place": order.accommodation_place.name,
            }
            for order in orders
        ]

"""Serializers for orders."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.customers.serializers import CustomerShortSerializer

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)
    project_name = serializers.CharField(source="project.name", read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "project_id", "project_name", "quantity", "unit_price", "subtotal"]


class OrderSerializer(serializers.ModelSerializer):
    customer = CustomerShortSerializer(read_only=True)
    accommodation_place_id = serializers.IntegerField(read_only=True)
    accommodation_place_name = serializers.CharField(source="accommodation_place.name", read_only=True)
    package_id = serializers.IntegerField(read_only=True)
    package_name = serializers.CharField(source="package.name", read_only=True, default=None)
    booking_id = serializers.IntegerField(read_only=True)
    balance_due = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer",
            "accommodation_place_id",
            "accommodation_place_name",
            "package_id",
            "package_name",
            "booking_id",
            "room_number",
            "order_date",
            "visit_date",
            "people_count",
            "total_amount",
            "paid_amount",
            "discount_amount",
            "balance_due",
            "status",
            "payment_status",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderDetailSerializer(OrderSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["items"]
        read_only_fields = fields


class OrderItemInputSerializer(serializers.Serializer):
    project_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class OrderCreateSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField(min_value=1)
    accommodation_place_id = serializers.IntegerField(min_value=1)
    package_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    items = OrderItemInputSerializer(many=True, required=False, default=list)
    room_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    visit_date = serializers.DateField()
    people_count = serializers.IntegerField(min_value=1)
    discount_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, default=Decimal("0")
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class OrderStatusSerializer(serializers.Serializer):
    # values are checked by the service so unknown ones map to INVALID_STATUS
    status = serializers.CharField(required=False, allow_blank=True)
    payment_status = serializers.CharField(required=False, allow_blank=True)


class OrderPaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    action = serializers.ChoiceField(choices=["add", "set"], default="add")

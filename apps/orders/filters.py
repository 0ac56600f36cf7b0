"""FilterSet definitions for order listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Order


class OrderFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    status = django_filters.ChoiceFilter(choices=Order.Status.choices)
    payment_status = django_filters.ChoiceFilter(choices=Order.PaymentStatus.choices)
    customer_id = django_filters.NumberFilter(field_name="customer_id")
    accommodation_place_id = django_filters.NumberFilter(field_name="accommodation_place_id")
    visit_date_from = django_filters.DateFilter(field_name="visit_date", lookup_expr="gte")
    visit_date_to = django_filters.DateFilter(field_name="visit_date", lookup_expr="lte")

    class Meta:
        model = Order
        fields = ["status", "payment_status"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(
            Q(order_number__icontains=value)
            | Q(customer__name__icontains=value)
            | Q(customer__phone__icontains=value)
        )

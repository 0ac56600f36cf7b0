"""FilterSet definitions for booking listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    visit_date_from = django_filters.DateFilter(field_name="visit_date", lookup_expr="gte")
    visit_date_to = django_filters.DateFilter(field_name="visit_date", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status", "source"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(
            Q(booking_code__icontains=value)
            | Q(customer_name__icontains=value)
            | Q(customer_phone__icontains=value)
        )

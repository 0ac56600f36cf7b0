"""FilterSet definitions for package listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Package


class PackageFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    is_active = django_filters.BooleanFilter()
    show_in_booking_form = django_filters.BooleanFilter()

    class Meta:
        model = Package
        fields = ["is_active", "show_in_booking_form"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

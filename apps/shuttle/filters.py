"""FilterSet definitions for the shuttle API."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Driver, ShuttleSchedule, Vehicle


class ShuttleScheduleFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    date = django_filters.DateFilter()
    status = django_filters.ChoiceFilter(choices=ShuttleSchedule.Status.choices)
    vehicle_id = django_filters.NumberFilter(field_name="vehicle_id")
    driver_id = django_filters.NumberFilter(field_name="driver_id")

    class Meta:
        model = ShuttleSchedule
        fields = ["date", "status"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(
            Q(batch_name__icontains=value)
            | Q(vehicle__plate_number__icontains=value)
            | Q(driver__name__icontains=value)
        )


class VehicleFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(field_name="plate_number", lookup_expr="icontains")
    status = django_filters.ChoiceFilter(choices=Vehicle.Status.choices)
    vehicle_type = django_filters.CharFilter()

    class Meta:
        model = Vehicle
        fields = ["status", "vehicle_type"]


class DriverFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    status = django_filters.ChoiceFilter(choices=Driver.Status.choices)

    class Meta:
        model = Driver
        fields = ["status"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(Q(name__icontains=value) | Q(phone__icontains=value))

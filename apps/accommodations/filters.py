"""FilterSet definitions for accommodation listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import AccommodationPlace


class AccommodationFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    type = django_filters.ChoiceFilter(choices=AccommodationPlace.PlaceType.choices)
    is_active = django_filters.BooleanFilter()

    class Meta:
        model = AccommodationPlace
        fields = ["type", "is_active"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(Q(name__icontains=value) | Q(address__icontains=value))

"""FilterSet definitions for customer listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Customer


class CustomerFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    source = django_filters.ChoiceFilter(choices=Customer.Source.choices)
    tag = django_filters.CharFilter(method="filter_tag")

    class Meta:
        model = Customer
        fields = ["source"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(Q(name__icontains=value) | Q(phone__icontains=value))

    def filter_tag(self, queryset, name, value):  # type: ignore
        # JSON containment is not portable to SQLite; match the serialized list
        return queryset.filter(tags__icontains=f'"{value}"')

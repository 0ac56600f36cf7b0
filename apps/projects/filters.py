"""FilterSet definitions for project listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Project


class ProjectFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    season = django_filters.ChoiceFilter(choices=Project.Season.choices)
    is_active = django_filters.BooleanFilter()

    class Meta:
        model = Project
        fields = ["season", "is_active"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

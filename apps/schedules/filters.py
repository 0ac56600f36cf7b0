"""FilterSet definitions for schedules and coaches."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Coach, DailySchedule


class ScheduleFilterSet(django_filters.FilterSet):
    date = django_filters.DateFilter()
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    project_id = django_filters.NumberFilter(field_name="project_id")
    coach_id = django_filters.NumberFilter(field_name="coach_id")
    status = django_filters.ChoiceFilter(choices=DailySchedule.Status.choices)

    class Meta:
        model = DailySchedule
        fields = ["date", "status"]


class CoachFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Coach.Status.choices)

    class Meta:
        model = Coach
        fields = ["status"]

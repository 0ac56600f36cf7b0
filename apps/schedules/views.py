"""Activity timeline API."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import ADMIN, COACH, OPERATOR, RoleRequiredMixin
from shared.utils import parse_date_param

from . import services
from .filters import CoachFilterSet, ScheduleFilterSet
from .models import Coach, DailySchedule
from .serializers import (
    CoachSerializer,
    ConflictCheckSerializer,
    DailyScheduleSerializer,
    ScheduleCreateSerializer,
    ScheduleStatusSerializer,
    ScheduleUpdateSerializer,
    TimelineScheduleSerializer,
)

STAFF_AND_COACHES = (ADMIN, OPERATOR, COACH)


class ScheduleViewSet(
    RoleRequiredMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = DailySchedule.objects.select_related("project", "coach")
    serializer_class = DailyScheduleSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ScheduleFilterSet
    ordering_fields = ["date", "start_time", "created_at"]
    ordering = ["date", "start_time"]
    action_roles = {
        "list": STAFF_AND_COACHES,
        "retrieve": STAFF_AND_COACHES,
        "daily": STAFF_AND_COACHES,
        "change_status": STAFF_AND_COACHES,
        "default": (ADMIN, OPERATOR),
    }

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ScheduleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedule = services.create_schedule(**serializer.validated_data)
        return Response(DailyScheduleSerializer(schedule).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        schedule = self.get_object()
        serializer = ScheduleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedule = services.update_schedule(schedule, serializer.validated_data)
        return Response(DailyScheduleSerializer(schedule).data)

    @action(detail=False, methods=["get"])
    def daily(self, request):
        on_date = parse_date_param(request.query_params.get("date"))
        data = services.daily_timeline(on_date)
        for entry in data["timeline"]:
            entry["schedules"] = TimelineScheduleSerializer(entry["schedules"], many=True).data
        data["coaches"] = CoachSerializer(data["coaches"], many=True).data
        return Response(data)

    @action(detail=False, methods=["post"], url_path="check-conflicts")
    def check_conflicts(self, request):
        serializer = ConflictCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        conflicts = services.check_conflicts(
            on_date=data["date"],
            project=services.get_project(data["project_id"]),
            start_time=data["start_time"],
            end_time=data["end_time"],
            participant_count=data["participant_count"],
            coach=services.get_coach(data.get("coach_id")),
            exclude_id=data.get("exclude_id"),
        )
        return Response({"has_conflict": bool(conflicts), "conflicts": conflicts})

    @action(detail=True, methods=["patch"], url_path="status")
    def change_status(self, request, pk=None):
        schedule = self.get_object()
        serializer = ScheduleStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedule = services.change_status(schedule, serializer.validated_data["status"])
        return Response(DailyScheduleSerializer(schedule).data)


class CoachViewSet(
    RoleRequiredMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Coach.objects.all()
    serializer_class = CoachSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = CoachFilterSet
    ordering_fields = ["name", "created_at"]
    ordering = ["name"]
    action_roles = {
        "list": STAFF_AND_COACHES,
        "retrieve": STAFF_AND_COACHES,
        "availability": (ADMIN, OPERATOR),
        "default": (ADMIN,),
    }

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):
        coach = self.get_object()
        on_date = parse_date_param(request.query_params.get("date"))
        return Response(services.coach_availability(coach, on_date))

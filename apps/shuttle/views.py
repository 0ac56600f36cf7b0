"""Shuttle API: daily demand, pickup batches, vehicles and drivers."""

from __future__ import annotations

from django.db.models import Prefetch  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import ADMIN, DRIVER, OPERATOR, RoleRequiredMixin
from shared.utils import parse_date_param

from . import services
from .filters import DriverFilterSet, ShuttleScheduleFilterSet, VehicleFilterSet
from .models import Driver, ShuttleSchedule, ShuttleStop, Vehicle
from .serializers import (
    DriverSerializer,
    ShuttleScheduleCreateSerializer,
    ShuttleScheduleSerializer,
    ShuttleStatusSerializer,
    VehicleSerializer,
)

SHUTTLE_READERS = (ADMIN, OPERATOR, DRIVER)


def schedules_with_stops():
    return ShuttleSchedule.objects.select_related("vehicle", "driver").prefetch_related(
        Prefetch("stops", queryset=ShuttleStop.objects.select_related("accommodation_place"))
    )


class DailyStatsView(RoleRequiredMixin, APIView):
    action_roles = {"get": SHUTTLE_READERS}

    def get(self, request):
        on_date = parse_date_param(request.query_params.get("date"))
        data = services.daily_stats(on_date)
        data["existing_schedules"] = ShuttleScheduleSerializer(
            schedules_with_stops().filter(pk__in=data["existing_schedules"].values("pk")), many=True
        ).data
        return Response(data)


class ShuttleScheduleViewSet(
    RoleRequiredMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = ShuttleScheduleSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ShuttleScheduleFilterSet
    ordering_fields = ["date", "departure_time", "created_at", "batch_name"]
    ordering = ["-date", "departure_time"]
    action_roles = {
        "list": SHUTTLE_READERS,
        "retrieve": SHUTTLE_READERS,
        "stops": SHUTTLE_READERS,
        "change_status": SHUTTLE_READERS,
        "create": (ADMIN, OPERATOR),
        "default": (ADMIN,),
    }

    def get_queryset(self):  # type: ignore
        return schedules_with_stops()

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ShuttleScheduleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedule = services.create_schedule(**serializer.validated_data)
        schedule = self.get_queryset().get(pk=schedule.pk)
        return Response(ShuttleScheduleSerializer(schedule).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_schedule(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["get"])
    def stops(self, request, pk=None):
        schedule = self.get_object()
        data = ShuttleScheduleSerializer(schedule).data
        data.pop("stops")
        return Response({"schedule": data, "stops": services.stops_with_customers(schedule)})

    @action(detail=True, methods=["patch"], url_path="status")
    def change_status(self, request, pk=None):
        schedule = self.get_object()
        serializer = ShuttleStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedule = services.change_status(schedule, **serializer.validated_data)
        return Response(ShuttleScheduleSerializer(schedule).data)


class VehicleViewSet(
    RoleRequiredMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Vehicle.objects.all()
    serializer_class = VehicleSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = VehicleFilterSet
    ordering_fields = ["id", "seats", "plate_number"]
    ordering = ["id"]
    action_roles = {
        "list": SHUTTLE_READERS,
        "retrieve": SHUTTLE_READERS,
        "default": (ADMIN,),
    }


class DriverViewSet(
    RoleRequiredMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Driver.objects.all()
    serializer_class = DriverSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = DriverFilterSet
    ordering_fields = ["id", "name"]
    ordering = ["id"]
    action_roles = {
        "list": SHUTTLE_READERS,
        "retrieve": SHUTTLE_READERS,
        "default": (ADMIN,),
    }

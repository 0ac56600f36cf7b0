"""URL declarations for the shuttle app."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import DailyStatsView, DriverViewSet, ShuttleScheduleViewSet, VehicleViewSet

router = DefaultRouter()
router.register(r'schedules', ShuttleScheduleViewSet, basename='shuttle-schedule')
router.register(r'vehicles', VehicleViewSet, basename='vehicle')
router.register(r'drivers', DriverViewSet, basename='driver')

urlpatterns = [
    path('daily-stats/', DailyStatsView.as_view(), name='shuttle-daily-stats'),
    path('', include(router.urls)),
]

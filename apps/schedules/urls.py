"""URL declarations for the schedules app."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CoachViewSet, ScheduleViewSet

router = DefaultRouter()
# coaches/ must be matched before the schedule detail route
router.register(r'coaches', CoachViewSet, basename='coach')
router.register(r'', ScheduleViewSet, basename='schedule')

urlpatterns = [
    path('', include(router.urls)),
]

"""URL declarations for the accommodations app."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AccommodationPlaceViewSet

router = DefaultRouter()
router.register(r'', AccommodationPlaceViewSet, basename='accommodation')

urlpatterns = [
    path('', include(router.urls)),
]

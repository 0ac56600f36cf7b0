"""URL declarations for the packages app."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import PackageViewSet

router = DefaultRouter()
router.register(r'', PackageViewSet, basename='package')

urlpatterns = [
    path('', include(router.urls)),
]

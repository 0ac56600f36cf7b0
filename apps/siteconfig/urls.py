"""URL declarations for site settings."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import CampInfoView, SiteConfigDetailView, SiteConfigListView

urlpatterns = [
    path('', SiteConfigListView.as_view(), name='siteconfig-list'),
    path('camp/info/', CampInfoView.as_view(), name='siteconfig-camp-info'),
    path('<str:key>/', SiteConfigDetailView.as_view(), name='siteconfig-detail'),
]

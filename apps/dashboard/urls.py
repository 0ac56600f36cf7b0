"""URL routing for dashboard endpoints."""

from django.urls import path  # type: ignore

from .views import CustomerSourceView, OrderStatusView, ProjectRankingView, RevenueTrendView, StatsView

urlpatterns = [
    path('stats/', StatsView.as_view(), name='dashboard-stats'),
    path('revenue-trend/', RevenueTrendView.as_view(), name='dashboard-revenue-trend'),
    path('order-status/', OrderStatusView.as_view(), name='dashboard-order-status'),
    path('project-ranking/', ProjectRankingView.as_view(), name='dashboard-project-ranking'),
    path('customer-source/', CustomerSourceView.as_view(), name='dashboard-customer-source'),
]

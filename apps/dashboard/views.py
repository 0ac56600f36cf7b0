"""Read-only dashboard endpoints for admins and operators."""

from __future__ import annotations

from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import ADMIN, OPERATOR, RoleRequiredMixin

from . import services
from .serializers import ProjectRankingQuerySerializer, RevenueTrendQuerySerializer


class DashboardView(RoleRequiredMixin, APIView):
    action_roles = {"get": (ADMIN, OPERATOR)}


class StatsView(DashboardView):
    def get(self, request):
        return Response(services.overview_stats())


class RevenueTrendView(DashboardView):
    def get(self, request):
        serializer = RevenueTrendQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        return Response(services.revenue_trend(serializer.validated_data["days"]))


class OrderStatusView(DashboardView):
    def get(self, request):
        return Response(services.order_status_distribution())


class ProjectRankingView(DashboardView):
    def get(self, request):
        serializer = ProjectRankingQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        return Response(services.project_ranking(serializer.validated_data["limit"]))


class CustomerSourceView(DashboardView):
    def get(self, request):
        return Response(services.customer_source_distribution())

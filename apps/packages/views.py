"""Package API: CRUD, item management and price quotes."""

from __future__ import annotations

import logging

from django.db.models import Prefetch  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import ADMIN, MARKETER, OPERATOR, RoleRequiredMixin
from shared.exceptions import ServiceError

from . import services
from .filters import PackageFilterSet
from .models import Package, PackageItem
from .serializers import (
    CalculatePriceSerializer,
    PackageDetailSerializer,
    PackageItemAddSerializer,
    PackageSerializer,
)

logger = logging.getLogger(__name__)


class PackageViewSet(RoleRequiredMixin, viewsets.ModelViewSet):
    queryset = Package.objects.prefetch_related(
        Prefetch("items", queryset=PackageItem.objects.select_related("project"))
    )
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PackageFilterSet
    ordering_fields = ["sort_order", "price", "created_at", "name"]
    action_roles = {
        "list": (ADMIN, OPERATOR, MARKETER),
        "retrieve": (ADMIN, OPERATOR, MARKETER),
        "calculate_price": (ADMIN, OPERATOR, MARKETER),
        "default": (ADMIN,),
    }

    def get_serializer_class(self):  # type: ignore
        if self.action == "retrieve":
            return PackageDetailSerializer
        return PackageSerializer

    def destroy(self, request, *args, **kwargs):  # type: ignore
        package = self.get_object()
        if package.orders.exists():
            raise ServiceError("Package is used by orders.", code="PACKAGE_HAS_ORDERS")
        package.delete()
        logger.info("Package %s deleted by %s", kwargs.get("pk"), request.user.username)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def items(self, request, pk=None):
        package = self.get_object()
        serializer = PackageItemAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = services.add_item(package, serializer.validated_data["project_id"])
        return Response(
            {"id": item.id, "package_id": package.id, "project_id": item.project_id},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["delete"], url_path=r"items/(?P<project_id>\d+)")
    def remove_item(self, request, pk=None, project_id=None):
        package = self.get_object()
        services.remove_item(package, int(project_id))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["post"], url_path="calculate-price")
    def calculate_price(self, request):
        serializer = CalculatePriceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        return Response(
            services.calculate_price(
                people_count=data["people_count"],
                package_id=data.get("package_id"),
                extra_project_ids=data["extra_project_ids"],
                custom_project_ids=data["custom_project_ids"],
            )
        )

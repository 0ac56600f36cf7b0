"""Customer CRM API."""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import ADMIN, MARKETER, OPERATOR, RoleRequiredMixin
from shared.exceptions import ServiceError

from .filters import CustomerFilterSet
from .models import Customer
from .serializers import CustomerDetailSerializer, CustomerSerializer
from .services import customer_stats

logger = logging.getLogger(__name__)


class CustomerViewSet(RoleRequiredMixin, viewsets.ModelViewSet):
    queryset = Customer.objects.all()
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = CustomerFilterSet
    ordering_fields = ["name", "created_at", "last_visit_date", "total_spent", "visit_count"]
    ordering = ["-created_at"]
    action_roles = {
        "list": (ADMIN, OPERATOR, MARKETER),
        "destroy": (ADMIN,),
        "default": (ADMIN, OPERATOR),
    }

    def get_serializer_class(self):  # type: ignore
        if self.action == "retrieve":
            return CustomerDetailSerializer
        return CustomerSerializer

    def perform_create(self, serializer):  # type: ignore
        customer = serializer.save()
        logger.info("Customer %s created by %s", customer.pk, self.request.user.username)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        customer = self.get_object()
        order_count = customer.orders.count()
        if order_count:
            raise ServiceError(
                "Customer has orders and cannot be deleted.",
                code="CUSTOMER_HAS_ORDERS",
                details={"order_count": order_count},
            )
        customer.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(customer_stats())

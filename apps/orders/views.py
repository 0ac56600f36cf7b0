"""Order API."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import ADMIN, MARKETER, OPERATOR, RoleRequiredMixin
from shared.utils import parse_date_param

from . import services
from .filters import OrderFilterSet
from .models import Order
from .serializers import (
    OrderCreateSerializer,
    OrderDetailSerializer,
    OrderPaymentSerializer,
    OrderSerializer,
    OrderStatusSerializer,
)


class OrderViewSet(
    RoleRequiredMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Order.objects.select_related("customer", "accommodation_place", "package")
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = OrderFilterSet
    ordering_fields = ["created_at", "order_date", "visit_date", "total_amount", "order_number"]
    ordering = ["-created_at"]
    action_roles = {
        "list": (ADMIN, OPERATOR, MARKETER),
        "retrieve": (ADMIN, OPERATOR, MARKETER),
        "destroy": (ADMIN,),
        "default": (ADMIN, OPERATOR),
    }

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action == "retrieve":
            qs = qs.prefetch_related("items__project")
        return qs

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return OrderCreateSerializer
        if self.action == "retrieve":
            return OrderDetailSerializer
        return OrderSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.create_order(**serializer.validated_data, created_by=request.user)
        read_serializer = OrderDetailSerializer(order, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_order(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["patch"], url_path="status")
    def change_status(self, request, pk=None):
        order = self.get_object()
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.change_status(
            order,
            status=serializer.validated_data.get("status") or None,
            payment_status=serializer.validated_data.get("payment_status") or None,
        )
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["patch"])
    def payment(self, request, pk=None):
        order = self.get_object()
        serializer = OrderPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.apply_payment(order, **serializer.validated_data)
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        start_date = parse_date_param(request.query_params.get("start_date"), "start_date", required=False)
        end_date = parse_date_param(request.query_params.get("end_date"), "end_date", required=False)
        return Response(services.order_stats(start_date, end_date))

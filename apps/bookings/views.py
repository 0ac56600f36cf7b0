"""Staff API for managing bookings."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.orders.serializers import OrderSerializer
from apps.users.api.permissions import ADMIN, OPERATOR, RoleRequiredMixin

from . import services
from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingDepositSerializer,
    BookingSerializer,
    BookingStatusSerializer,
)


class BookingViewSet(
    RoleRequiredMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Bookings from the public form and those entered by staff."""

    queryset = Booking.objects.select_related("order")
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["created_at", "visit_date", "total_amount", "booking_code"]
    ordering = ["-created_at"]
    action_roles = {
        "destroy": (ADMIN,),
        "default": (ADMIN, OPERATOR),
    }

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.create_booking(**serializer.validated_data, source=Booking.Source.MANUAL)
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_booking(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["patch"], url_path="status")
    def change_status(self, request, pk=None):
        booking = self.get_object()
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.change_status(booking, **serializer.validated_data)
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["patch"])
    def deposit(self, request, pk=None):
        booking = self.get_object()
        serializer = BookingDepositSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.update_deposit(booking, **serializer.validated_data)
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["post"])
    def convert(self, request, pk=None):
        order = services.convert_to_order(self.get_object(), created_by=request.user)
        return Response(
            {"order_id": order.id, "order_number": order.order_number, "order": OrderSerializer(order).data},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(services.booking_stats())

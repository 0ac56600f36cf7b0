"""
Unauthenticated endpoints behind the WeChat booking form.

Phones are always masked in responses; lookups of existing bookings and
orders require the caller to know the phone they were made with.
"""

from __future__ import annotations

from django.db import transaction  # type: ignore
from django.db.models import Prefetch  # type: ignore
from rest_framework import exceptions, generics, permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.accommodations.models import AccommodationPlace
from apps.accommodations.serializers import PublicHotelSerializer
from apps.orders.models import Order
from apps.packages.models import Package, PackageItem
from apps.packages.serializers import PublicPackageSerializer
from apps.projects.models import Project
from apps.projects.serializers import PublicProjectSerializer
from apps.siteconfig.services import get_camp_info
from shared.exceptions import NotFoundError, ServiceError
from shared.validators import is_valid_phone, mask_phone

from . import services
from .models import Booking
from .serializers import PublicBookingSerializer, PublicBookingStatusSerializer
from .tasks import notify_new_booking
from .throttles import PhoneRateThrottle


class PublicAPIView(APIView):
    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]


class PublicBookingCreateView(PublicAPIView):
    def post(self, request):
        serializer = PublicBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        throttle = PhoneRateThrottle()
        if not throttle.allow_request(request, self):
            raise exceptions.Throttled(wait=throttle.wait())

        data = dict(serializer.validated_data)
        data["customer_notes"] = data.pop("notes")
        booking = services.create_booking(**data, source=Booking.Source.WECHAT_FORM)
        transaction.on_commit(lambda: notify_new_booking.delay(booking.id))

        return Response(
            {
                "booking_code": booking.booking_code,
                "visit_date": services.format_visit_date(booking.visit_date),
                "customer_name": booking.customer_name,
                "customer_phone": mask_phone(booking.customer_phone),
                "people_count": booking.people_count,
                "child_count": booking.child_count,
                "adult_count": booking.adult_count,
                "hotel_name": booking.hotel_name,
                "room_number": booking.room_number,
                "package_name": booking.package_name or "待定",
                "unit_price": booking.unit_price,
                "child_price": booking.child_price,
                "total_amount": booking.total_amount,
                "confirm_text": services.confirm_text(booking),
            },
            status=status.HTTP_201_CREATED,
        )


class PublicBookingDetailView(PublicAPIView):
    def get(self, request, code: str):
        booking = Booking.objects.filter(booking_code=code).first()
        if booking is None:
            raise NotFoundError("Booking not found.", code="BOOKING_NOT_FOUND")
        return Response(PublicBookingStatusSerializer(booking).data)


def _booking_form_packages():
    return Package.objects.filter(is_active=True, show_in_booking_form=True).prefetch_related(
        Prefetch("items", queryset=PackageItem.objects.select_related("project"))
    )


class PublicPackageListView(generics.ListAPIView):
    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]
    pagination_class = None
    serializer_class = PublicPackageSerializer

    def get_queryset(self):  # type: ignore
        return _booking_form_packages()


class PublicPackageDetailView(generics.RetrieveAPIView):
    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]
    serializer_class = PublicPackageSerializer

    def get_queryset(self):  # type: ignore
        return _booking_form_packages()


class PublicHotelListView(PublicAPIView):
    def get(self, request):
        hotels = AccommodationPlace.objects.filter(is_active=True).order_by("type", "name")
        data = list(PublicHotelSerializer(hotels, many=True).data)
        data.append({"id": None, "name": "其他（请在备注中说明）", "type": "other", "address": "", "area": None})
        return Response(data)


class PublicActivityListView(generics.ListAPIView):
    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]
    pagination_class = None
    serializer_class = PublicProjectSerializer
    queryset = Project.objects.filter(is_active=True)


class PublicActivityDetailView(generics.RetrieveAPIView):
    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]
    serializer_class = PublicProjectSerializer
    queryset = Project.objects.filter(is_active=True)


class PublicAboutView(PublicAPIView):
    def get(self, request):
        return Response(get_camp_info())


def _public_booking(booking: Booking) -> dict:
    return {
        "type": "booking",
        "id": booking.id,
        "booking_code": booking.booking_code,
        "customer_name": booking.customer_name,
        "customer_phone": mask_phone(booking.customer_phone),
        "visit_date": booking.visit_date,
        "people_count": booking.people_count,
        "child_count": booking.child_count,
        "hotel_name": booking.hotel_name,
        "room_number": booking.room_number,
        "package_name": booking.package_name,
        "total_amount": booking.total_amount,
        "deposit_amount": booking.deposit_amount,
        "status": booking.status,
        "status_text": services.status_text(booking.status),
        "created_at": booking.created_at,
    }


def _public_order(order: Order, *, with_items: bool = False) -> dict:
    data = {
        "type": "order",
        "id": order.id,
        "order_number": order.order_number,
        "customer_name": order.customer.name,
        "customer_phone": mask_phone(order.customer.phone),
        "visit_date": order.visit_date,
        "people_count": order.people_count,
        "accommodation_place": order.accommodation_place.name,
        "room_number": order.room_number,
        "package_name": order.package.name if order.package else None,
        "total_amount": order.total_amount,
        "paid_amount": order.paid_amount,
        "status": order.status,
        "status_text": order.get_status_display(),
        "payment_status": order.payment_status,
        "created_at": order.created_at,
    }
    if with_items:
        data["items"] = [
            {"project_name": item.project.name, "quantity": item.quantity, "subtotal": item.subtotal}
            for item in order.items.select_related("project")
        ]
    return data


def _orders_for_phone(phone: str):
    return Order.objects.filter(customer__phone=phone).select_related(
        "customer", "accommodation_place", "package"
    )


class PublicOrderQueryView(PublicAPIView):
    def post(self, request):
        phone = request.data.get("phone") if hasattr(request.data, "get") else None
        if not is_valid_phone(phone):
            raise ServiceError("Please enter a valid 11 digit mobile number.", code="INVALID_PHONE")
        bookings = Booking.objects.filter(customer_phone=phone).order_by("-created_at")
        orders = _orders_for_phone(phone).order_by("-created_at")
        return Response(
            {
                "phone": mask_phone(phone),
                "bookings": [_public_booking(booking) for booking in bookings],
                "orders": [_public_order(order) for order in orders],
            }
        )


class PublicOrderDetailView(PublicAPIView):
    def get(self, request, kind: str, pk: int):
        phone = request.query_params.get("phone", "")
        if kind == "booking":
            booking = Booking.objects.filter(pk=pk, customer_phone=phone).first()
            if booking is not None:
                return Response(_public_booking(booking))
        elif kind == "order":
            order = _orders_for_phone(phone).filter(pk=pk).first()
            if order is not None:
                return Response(_public_order(order, with_items=True))
        raise NotFoundError("No matching record for this phone number.", code="NOT_FOUND")

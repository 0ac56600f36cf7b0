"""Accommodation place API."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import ADMIN, MARKETER, OPERATOR, RoleRequiredMixin
from shared.exceptions import ServiceError

from .filters import AccommodationFilterSet
from .models import AccommodationPlace
from .serializers import AccommodationPlaceSerializer


class AccommodationPlaceViewSet(RoleRequiredMixin, viewsets.ModelViewSet):
    queryset = AccommodationPlace.objects.all()
    serializer_class = AccommodationPlaceSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = AccommodationFilterSet
    ordering_fields = ["name", "distance", "created_at"]
    action_roles = {
        "list": (ADMIN, OPERATOR, MARKETER),
        "retrieve": (ADMIN, OPERATOR, MARKETER),
        "default": (ADMIN,),
    }

    def destroy(self, request, *args, **kwargs):  # type: ignore
        place = self.get_object()
        if place.orders.exists() or place.shuttle_stops.exists():
            raise ServiceError(
                "Accommodation is referenced by orders or shuttle stops; deactivate it instead.",
                code="ACCOMMODATION_IN_USE",
            )
        place.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

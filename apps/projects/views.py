"""Activity project API."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import ADMIN, MARKETER, OPERATOR, RoleRequiredMixin
from shared.exceptions import ServiceError

from .filters import ProjectFilterSet
from .models import Project
from .serializers import ProjectSerializer


class ProjectViewSet(RoleRequiredMixin, viewsets.ModelViewSet):
    queryset = Project.objects.all()
    serializer_class = ProjectSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ProjectFilterSet
    ordering_fields = ["sort_order", "price", "created_at", "name"]
    action_roles = {
        "list": (ADMIN, OPERATOR, MARKETER),
        "retrieve": (ADMIN, OPERATOR, MARKETER),
        "default": (ADMIN,),
    }

    def destroy(self, request, *args, **kwargs):  # type: ignore
        project = self.get_object()
        if project.order_items.exists():
            raise ServiceError("Project is used by orders.", code="PROJECT_HAS_ORDERS")
        if project.package_items.exists():
            raise ServiceError("Project is included in packages.", code="PROJECT_HAS_PACKAGES")
        project.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

"""Site settings API: key/value map, single keys and the camp profile."""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import ADMIN, ALL_ROLES, RoleRequiredMixin
from shared.exceptions import ServiceError

from . import services
from .serializers import ConfigEntrySerializer, ConfigValueSerializer


class SiteConfigPermissionMixin(RoleRequiredMixin):
    action_roles = {"get": ALL_ROLES, "default": (ADMIN,)}


class SiteConfigListView(SiteConfigPermissionMixin, APIView):
    def get(self, request):
        return Response(services.config_map(request.query_params.get("group")))

    def put(self, request):
        configs = request.data.get("configs") if isinstance(request.data, dict) else None
        if not isinstance(configs, list):
            raise ServiceError("configs must be a list.", code="INVALID_DATA")
        serializer = ConfigEntrySerializer(data=configs, many=True)
        serializer.is_valid(raise_exception=True)
        services.save_configs(serializer.validated_data)
        return Response(services.config_map())


class SiteConfigDetailView(SiteConfigPermissionMixin, APIView):
    def get(self, request, key: str):
        return Response(services.get_config(key))

    def put(self, request, key: str):
        serializer = ConfigValueSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        config = services.save_config(key, data["value"], data.get("label"), data.get("group"))
        return Response({"key": config.key, "value": config.value, "label": config.label, "group": config.group})

    def delete(self, request, key: str):
        services.delete_config(key)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CampInfoView(SiteConfigPermissionMixin, APIView):
    def get(self, request):
        return Response(services.get_camp_info())

    def put(self, request):
        return Response(services.save_camp_info(request.data))

"""Query parameter validation for dashboard endpoints."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class RevenueTrendQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=1, max_value=365, default=30)


class ProjectRankingQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)

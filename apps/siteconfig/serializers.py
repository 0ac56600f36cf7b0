"""Payload validation for site settings."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class ConfigEntrySerializer(serializers.Serializer):
    key = serializers.CharField(max_length=100)
    value = serializers.JSONField(allow_null=True)
    label = serializers.CharField(max_length=100, required=False, allow_blank=True)
    group = serializers.CharField(max_length=50, required=False)


class ConfigValueSerializer(serializers.Serializer):
    value = serializers.JSONField(allow_null=True)
    label = serializers.CharField(max_length=100, required=False, allow_blank=True)
    group = serializers.CharField(max_length=50, required=False)

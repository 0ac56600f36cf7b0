"""JSON renderer that wraps successful payloads in the API envelope."""

from __future__ import annotations

from rest_framework.renderers import JSONRenderer  # type: ignore


class EnvelopeJSONRenderer(JSONRenderer):
    """Render ``{"success": true, "data": ...}`` for every 2xx/3xx response.

    Error bodies are produced already enveloped by
    ``shared.exceptions.api_exception_handler`` and pass through untouched.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):  # type: ignore
        response = (renderer_context or {}).get("response")
        if response is None:
            return super().render(data, accepted_media_type, renderer_context)
        if response.status_code == 204:
            return b""
        if response.status_code < 400:
            data = {"success": True, "data": data}
        return super().render(data, accepted_media_type, renderer_context)

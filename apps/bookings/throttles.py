"""Rate limiting for the public booking form."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework.throttling import SimpleRateThrottle  # type: ignore


class PhoneRateThrottle(SimpleRateThrottle):
    """
    Limit public submissions per mobile number.

    The window comes from ``PUBLIC_BOOKING_RATE_LIMIT`` as
    ``(requests, seconds)`` instead of DRF's ``"3/min"`` strings, since the
    form allows a five minute window. The view checks it explicitly after the
    payload validated, so malformed requests do not use up the allowance.
    """

    scope = "public_booking"

    def get_rate(self):  # type: ignore
        return settings.PUBLIC_BOOKING_RATE_LIMIT

    def parse_rate(self, rate):  # type: ignore
        if rate is None:
            return None, None
        num_requests, duration = rate
        return int(num_requests), int(duration)

    def get_cache_key(self, request, view):  # type: ignore
        phone = request.data.get("customer_phone") if hasattr(request.data, "get") else None
        if not phone:
            return None
        return self.cache_format % {"scope": self.scope, "ident": phone}

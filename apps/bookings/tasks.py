"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from . import services
from .models import Booking

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (run by Celery Beat)
# ============================================================================

@shared_task(name="bookings.expire_stale_bookings")
def expire_stale_bookings() -> dict[str, int]:
    """
    Cancel pending bookings whose visit date has already passed.

    Runs daily via Celery Beat.

    Returns:
        dict: {"expired": number of cancelled bookings}
    """
    expired_count = services.expire_stale_bookings()
    if expired_count > 0:
        logger.info(f"Expired {expired_count} stale pending bookings")
    return {"expired": expired_count}


# ============================================================================
# NOTIFICATION TASKS
# ============================================================================

@shared_task(name="bookings.notify_new_booking")
def notify_new_booking(booking_id: int) -> int:
    """Email the operators about a booking submitted through the public form."""
    try:
        booking = Booking.objects.get(id=booking_id)
    except Booking.DoesNotExist:
        logger.error(f"Booking {booking_id} not found for new booking notification")
        return 0

    from apps.notifications.services import send_new_booking_email

    sent = send_new_booking_email(booking)
    logger.info(f"[NOTIFICATION] New booking {booking.booking_code} sent to {sent} recipients")
    return sent

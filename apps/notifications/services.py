"""Outgoing e-mail notifications."""

from __future__ import annotations

import logging
import smtplib
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils.html import strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking

logger = logging.getLogger(__name__)


def send_email_notification(
    recipient_email: str,
    subject: str,
    template_name: str,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send one e-mail, rendering ``template_name`` when no HTML is given.

    Without a template the plain text comes from ``context["message"]``.
    Delivery failures are logged and reported as ``False`` so callers in
    request or task code keep going.
    """
    if html_message:
        text_message = strip_tags(html_message)
    elif template_name:
        html_message = render_to_string(template_name, context)
        text_message = strip_tags(html_message)
    else:
        text_message = context.get("message", "")

    try:
        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False

    logger.info(f"Email sent successfully to {recipient_email}: {subject}")
    return True


def send_new_booking_email(booking: "Booking") -> int:
    """Alert the operators listed in ``BOOKING_NOTIFY_EMAILS`` about a new booking."""
    from apps.bookings.services import confirm_text

    recipients = list(getattr(settings, "BOOKING_NOTIFY_EMAILS", []))
    if not recipients:
        logger.warning("BOOKING_NOTIFY_EMAILS is empty, booking %s not announced", booking.booking_code)
        return 0

    subject = f"新预约 {booking.booking_code}：{booking.customer_name} {booking.visit_date:%Y-%m-%d} {booking.people_count}人"
    context = {
        "booking": booking,
        "confirm_text": confirm_text(booking),
        "admin_path": f"/bookings/{booking.pk}",
    }
    return sum(
        send_email_notification(email, subject, "notifications/new_booking.html", context)
        for email in recipients
    )

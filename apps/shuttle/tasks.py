"""Celery tasks for the shuttle domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from . import services

logger = logging.getLogger(__name__)


@shared_task(name="shuttle.complete_past_schedules")
def complete_past_schedules() -> dict[str, int]:
    """
    Mark shuttle schedules of past days as completed.

    Runs daily via Celery Beat.

    Returns:
        dict: {"completed": number of closed schedules}
    """
    completed_count = services.complete_past_schedules()
    if completed_count > 0:
        logger.info(f"Completed {completed_count} past shuttle schedules")
    return {"completed": completed_count}

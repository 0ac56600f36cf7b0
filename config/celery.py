import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("camp_booking")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Cancel public bookings nobody confirmed before the visit date
    "expire-stale-bookings": {
        "task": "bookings.expire_stale_bookings",
        "schedule": crontab(minute=10, hour=0),
    },
    # Close shuttle batches left open from previous days
    "complete-past-shuttle-schedules": {
        "task": "shuttle.complete_past_schedules",
        "schedule": crontab(minute=20, hour=0),
    },
}

app.conf.timezone = "Asia/Shanghai"

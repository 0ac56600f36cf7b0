"""
Activity scheduling.

Two schedules overlap when ``a.start < b.end and a.end > b.start`` on the
same date, so back-to-back slots never clash. Cancelled schedules take no
part in capacity or coach checks.
"""

from __future__ import annotations

import logging
from datetime import date, time
from typing import Any

from django.db import transaction  # type: ignore

from apps.orders.models import OrderItem
from apps.projects.models import Project
from shared.exceptions import ConflictError, NotFoundError, ServiceError

from .models import Coach, DailySchedule

logger = logging.getLogger(__name__)


def _overlapping(on_date: date, start_time: time, end_time: time, exclude_id: int | None = None):
    qs = DailySchedule.objects.filter(date=on_date, start_time__lt=end_time, end_time__gt=start_time).exclude(
        status=DailySchedule.Status.CANCELLED
    )
    if exclude_id:
        qs = qs.exclude(pk=exclude_id)
    return qs


def check_conflicts(
    *,
    on_date: date,
    project: Project,
    start_time: time,
    end_time: time,
    participant_count: int,
    coach: Coach | None = None,
    exclude_id: int | None = None,
) -> list[dict[str, Any]]:
    """Return the capacity and coach conflicts for a proposed slot."""
    conflicts: list[dict[str, Any]] = []
    overlapping = _overlapping(on_date, start_time, end_time, exclude_id)

    if project.capacity:
        same_project = list(overlapping.filter(project=project).order_by("start_time"))
        current = sum(schedule.participant_count for schedule in same_project)
        total = current + participant_count
        if total > project.capacity:
            conflicts.append(
                {
                    "type": "capacity",
                    "message": (
                        f"{project.name} already has {current} participants in this slot; "
                        f"{total} would exceed the capacity of {project.capacity}."
                    ),
                    "details": {
                        "current_count": current,
                        "new_count": participant_count,
                        "total_count": total,
                        "capacity": project.capacity,
                        "overlapping_schedules": [
                            {
                                "id": schedule.id,
                                "start_time": schedule.start_time,
                                "end_time": schedule.end_time,
                                "participant_count": schedule.participant_count,
                            }
                            for schedule in same_project
                        ],
                    },
                }
            )

    if coach is not None:
        busy = list(overlapping.filter(coach=coach).select_related("project").order_by("start_time"))
        if busy:
            conflicts.append(
                {
                    "type": "coach",
                    "message": f"Coach {coach.name} is already booked in this slot.",
                    "details": {
                        "coach_id": coach.id,
                        "coach_name": coach.name,
                        "conflicting_schedules": [
                            {
                                "id": schedule.id,
                                "project_name": schedule.project.name,
                                "start_time": schedule.start_time,
                                "end_time": schedule.end_time,
                            }
                            for schedule in busy
                        ],
                    },
                }
            )
    return conflicts


def get_project(project_id: int) -> Project:
    project = Project.objects.filter(pk=project_id).first()
    if project is None:
        raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
    return project


def get_coach(coach_id: int | None) -> Coach | None:
    if not coach_id:
        return None
    coach = Coach.objects.filter(pk=coach_id).first()
    if coach is None:
        raise NotFoundError("Coach not found.", code="COACH_NOT_FOUND")
    return coach


def _raise_on_conflicts(conflicts: list[dict[str, Any]]) -> None:
    if conflicts:
        raise ConflictError(
            "The schedule conflicts with existing arrangements.",
            code="SCHEDULE_CONFLICT",
            details={"conflicts": conflicts},
        )


@transaction.atomic
def create_schedule(
    *,
    date: date,
    project_id: int,
    start_time: time,
    end_time: time,
    participant_count: int,
    coach_id: int | None = None,
    order_item_id: int | None = None,
    notes: str = "",
    skip_conflict_check: bool = False,
) -> DailySchedule:
    project = get_project(project_id)
    coach = get_coach(coach_id)
    order_item = None
    if order_item_id:
        order_item = OrderItem.objects.filter(pk=order_item_id).first()
        if order_item is None:
            raise NotFoundError("Order item not found.", code="ORDER_ITEM_NOT_FOUND")

    if not skip_conflict_check:
        _raise_on_conflicts(
            check_conflicts(
                on_date=date,
                project=project,
                start_time=start_time,
                end_time=end_time,
                participant_count=participant_count,
                coach=coach,
            )
        )

    schedule = DailySchedule.objects.create(
        date=date,
        project=project,
        coach=coach,
        order_item=order_item,
        start_time=start_time,
        end_time=end_time,
        participant_count=participant_count,
        notes=notes or "",
    )
    logger.info(
        "Schedule %s created: project %s on %s %s-%s",
        schedule.pk,
        project.pk,
        date,
        start_time,
        end_time,
    )
    return schedule


def _check_slot(schedule: DailySchedule) -> None:
    _raise_on_conflicts(
        check_conflicts(
            on_date=schedule.date,
            project=schedule.project,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            participant_count=schedule.participant_count,
            coach=schedule.coach,
            exclude_id=schedule.pk,
        )
    )


@transaction.atomic
def update_schedule(schedule: DailySchedule, changes: dict[str, Any]) -> DailySchedule:
    """
    Apply ``changes`` to a schedule.

    Conflicts are re-checked against the merged slot, excluding the schedule
    itself, whenever the time range, coach or group size changes, and when a
    cancelled schedule is brought back.
    """
    changes = dict(changes)
    skip_conflict_check = changes.pop("skip_conflict_check", False)
    original_coach_id = schedule.coach_id
    was_cancelled = schedule.status == DailySchedule.Status.CANCELLED
    if "coach_id" in changes:
        schedule.coach = get_coach(changes.pop("coach_id"))
    if "status" in changes and changes["status"] not in DailySchedule.Status.values:
        raise ServiceError(f"Unknown schedule status {changes['status']!r}.", code="INVALID_STATUS")
    timing_changed = bool({"start_time", "end_time", "participant_count"} & changes.keys())
    for field, value in changes.items():
        setattr(schedule, field, value)

    if schedule.start_time >= schedule.end_time:
        raise ServiceError(
            "The start time must be before the end time.",
            code="VALIDATION_ERROR",
            details={"end_time": ["Must be after start_time."]},
        )
    coach_changed = schedule.coach_id != original_coach_id
    revived = was_cancelled and schedule.status != DailySchedule.Status.CANCELLED
    if schedule.status == DailySchedule.Status.CANCELLED:
        skip_conflict_check = True
    if not skip_conflict_check and (timing_changed or coach_changed or revived):
        _check_slot(schedule)
    schedule.save()
    return schedule


def change_status(schedule: DailySchedule, status: str) -> DailySchedule:
    if status not in DailySchedule.Status.values:
        raise ServiceError(f"Unknown schedule status {status!r}.", code="INVALID_STATUS")
    previous = schedule.status
    if previous == DailySchedule.Status.CANCELLED and status != DailySchedule.Status.CANCELLED:
        # a cancelled slot is invisible to conflict checks until it comes back
        _check_slot(schedule)
    schedule.status = status
    schedule.save(update_fields=["status", "updated_at"])
    logger.info("Schedule %s status %s -> %s", schedule.pk, previous, status)
    return schedule


def daily_timeline(on_date: date) -> dict[str, Any]:
    """Schedules for one day grouped per active project, with the on-duty coaches."""
    schedules = list(
        DailySchedule.objects.filter(date=on_date).select_related("coach").order_by("start_time", "project_id")
    )
    active = [schedule for schedule in schedules if schedule.status != DailySchedule.Status.CANCELLED]

    timeline = []
    for project in Project.objects.filter(is_active=True):
        project_schedules = [schedule for schedule in schedules if schedule.project_id == project.id]
        participants = sum(
            schedule.participant_count
            for schedule in project_schedules
            if schedule.status != DailySchedule.Status.CANCELLED
        )
        timeline.append(
            {
                "project": {
                    "id": project.id,
                    "name": project.name,
                    "duration": project.duration,
                    "capacity": project.capacity,
                },
                "schedules": project_schedules,
                "total_participants": participants,
                "remaining_capacity": project.capacity - participants if project.capacity else None,
            }
        )

    return {
        "date": on_date,
        "timeline": timeline,
        "coaches": list(Coach.objects.filter(status=Coach.Status.ON_DUTY)),
        "summary": {
            "total_schedules": len(active),
            "total_participants": sum(schedule.participant_count for schedule in active),
            "projects_with_schedules": len({schedule.project_id for schedule in active}),
            "coaches_assigned": len({schedule.coach_id for schedule in active if schedule.coach_id}),
        },
    }


def coach_availability(coach: Coach, on_date: date) -> dict[str, Any]:
    schedules = (
        DailySchedule.objects.filter(coach=coach, date=on_date)
        .exclude(status=DailySchedule.Status.CANCELLED)
        .select_related("project")
        .order_by("start_time")
    )
    busy_slots = [
        {
            "schedule_id": schedule.id,
            "project_name": schedule.project.name,
            "start_time": schedule.start_time,
            "end_time": schedule.end_time,
        }
        for schedule in schedules
    ]
    return {
        "coach": {"id": coach.id, "name": coach.name, "status": coach.status},
        "date": on_date,
        "busy_slots": busy_slots,
        "total_schedules": len(busy_slots),
        "is_available": coach.status == Coach.Status.ON_DUTY,
    }

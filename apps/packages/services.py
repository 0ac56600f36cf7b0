"""
Package pricing.

``price_for_date`` prices a booking for a visit date, honouring special
pricing ranges. ``calculate_price`` is the staff quoting tool combining a
package with extra projects or a free combination of projects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore

from apps.projects.models import Project
from shared.exceptions import ConflictError, NotFoundError, ServiceError

from .models import Package, PackageItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingPrice:
    unit_price: Decimal
    child_price: Decimal
    total_amount: Decimal


def _money(value: Any) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


def special_price_for(package: Package, visit_date: date) -> dict[str, Any] | None:
    """Return the first special-pricing entry whose range contains ``visit_date``."""
    for date_range, pricing in (package.special_pricing or {}).items():
        start, _sep, end = date_range.partition("~")
        try:
            starts, ends = date.fromisoformat(start.strip()), date.fromisoformat(end.strip())
        except ValueError:
            logger.warning("Package %s has malformed pricing range %r", package.pk, date_range)
            continue
        if starts <= visit_date <= ends and isinstance(pricing, dict):
            return pricing
    return None


def price_for_date(package: Package, visit_date: date, people_count: int, child_count: int = 0) -> BookingPrice:
    unit_price = _money(package.price)
    if package.child_price is not None:
        child_price = _money(package.child_price)
    else:
        child_price = _money(unit_price * Decimal(str(settings.DEFAULT_CHILD_PRICE_RATIO)))

    special = special_price_for(package, visit_date)
    if special:
        if special.get("price") is not None:
            unit_price = _money(special["price"])
        if special.get("child_price") is not None:
            child_price = _money(special["child_price"])

    adults = max(people_count - child_count, 0)
    total = unit_price * adults + child_price * child_count
    return BookingPrice(unit_price=unit_price, child_price=child_price, total_amount=_money(total))


def resolve_projects(project_ids: Iterable[int]) -> list[Project]:
    """Load projects by id, raising ``INVALID_PROJECTS`` when any is unknown."""
    ids = list(dict.fromkeys(project_ids))
    projects = list(Project.objects.filter(pk__in=ids))
    if len(projects) != len(ids):
        missing = sorted(set(ids) - {project.pk for project in projects})
        raise ServiceError(
            "Some projects do not exist.", code="INVALID_PROJECTS", details={"project_ids": missing}
        )
    by_id = {project.pk: project for project in projects}
    return [by_id[pk] for pk in ids]


@transaction.atomic
def set_package_projects(package: Package, projects: list[Project]) -> None:
    PackageItem.objects.filter(package=package).delete()
    PackageItem.objects.bulk_create(PackageItem(package=package, project=project) for project in projects)


def add_item(package: Package, project_id: int) -> PackageItem:
    project = Project.objects.filter(pk=project_id).first()
    if project is None:
        raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
    if PackageItem.objects.filter(package=package, project=project).exists():
        raise ConflictError("Project is already in this package.", code="ITEM_EXISTS")
    return PackageItem.objects.create(package=package, project=project)


def remove_item(package: Package, project_id: int) -> None:
    deleted, _ = PackageItem.objects.filter(package=package, project_id=project_id).delete()
    if not deleted:
        raise NotFoundError("Project is not in this package.", code="ITEM_NOT_FOUND")


def get_package_for_sale(package_id: int, people_count: int | None = None) -> Package:
    """Fetch a package that can be sold, optionally enforcing ``min_people``."""
    package = Package.objects.filter(pk=package_id).first()
    if package is None:
        raise NotFoundError("Package not found.", code="PACKAGE_NOT_FOUND")
    if not package.is_active:
        raise ServiceError("Package is no longer available.", code="PACKAGE_INACTIVE")
    if people_count is not None and package.min_people and people_count < package.min_people:
        raise ServiceError(
            f"This package requires at least {package.min_people} people.",
            code="MIN_PEOPLE_NOT_MET",
            details={"min_people": package.min_people},
        )
    return package


def _priced_projects(project_ids: Iterable[int], people_count: int) -> tuple[list[dict[str, Any]], Decimal]:
    lines: list[dict[str, Any]] = []
    total = Decimal("0")
    for project in Project.objects.filter(pk__in=list(project_ids)).order_by("sort_order", "id"):
        if not project.is_active:
            raise ServiceError(f'Project "{project.name}" is no longer available.', code="PROJECT_INACTIVE")
        subtotal = project.price * people_count
        total += subtotal
        lines.append(
            {
                "id": project.id,
                "name": project.name,
                "unit_price": project.price,
                "people_count": people_count,
                "subtotal": subtotal,
            }
        )
    return lines, total


def calculate_price(
    people_count: int,
    package_id: int | None = None,
    extra_project_ids: Iterable[int] = (),
    custom_project_ids: Iterable[int] = (),
) -> dict[str, Any]:
    package_info = None
    package_price = Decimal("0")
    if package_id:
        package = get_package_for_sale(package_id, people_count)
        package_price = package.price * people_count
        package_info = {
            "id": package.id,
            "name": package.name,
            "unit_price": package.price,
            "people_count": people_count,
            "subtotal": package_price,
            "projects": [
                {"id": item.project.id, "name": item.project.name, "price": item.project.price, "unit": item.project.unit}
                for item in package.items.select_related("project")
            ],
        }

    extra_projects, extra_price = _priced_projects(extra_project_ids, people_count)
    custom_projects: list[dict[str, Any]] = []
    custom_price = Decimal("0")
    # a free combination only applies when no package is chosen
    if not package_id:
        custom_projects, custom_price = _priced_projects(custom_project_ids, people_count)

    return {
        "package": package_info,
        "extra_projects": extra_projects or None,
        "custom_projects": custom_projects or None,
        "summary": {
            "package_price": package_price,
            "extra_projects_price": extra_price,
            "custom_projects_price": custom_price,
            "total_amount": package_price + extra_price + custom_price,
            "people_count": people_count,
        },
    }

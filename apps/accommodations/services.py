"""Lookup helpers for accommodation places."""

from __future__ import annotations

import logging

from .models import AccommodationPlace

logger = logging.getLogger(__name__)


def find_by_name(name: str) -> AccommodationPlace | None:
    name = (name or "").strip()
    if not name:
        return None
    return AccommodationPlace.objects.filter(name__icontains=name).order_by("id").first()


def find_or_create_by_name(name: str) -> AccommodationPlace:
    """Resolve free-text hotel names typed by guests, registering unknown ones."""
    place = find_by_name(name)
    if place is None:
        place = AccommodationPlace.objects.create(name=name.strip(), type=AccommodationPlace.PlaceType.EXTERNAL)
        logger.info("Accommodation %s registered from hotel name %r", place.pk, place.name)
    return place


AREA_KEYWORDS = (
    ("二道白河", "二道白河"),
    ("万达", "万达度假区"),
    ("景区", "长白山景区"),
)
DEFAULT_AREA = "其他"


def area_for(place: AccommodationPlace) -> str:
    """Coarse area shown on the public hotel picker, derived from the address."""
    address = place.address or ""
    for keyword, area in AREA_KEYWORDS:
        if keyword in address:
            return area
    return DEFAULT_AREA

"""Proximity-first candidate selection for activities and restaurants.

Candidates are ranked by haversine distance from where the traveler
currently is. Ties and "anything within the radius" choices are broken by
the per-request seeded RNG so the same seed yields the same plan.
"""

import math
import random
from collections.abc import Sequence
from typing import TypeVar

from backend.app.models.catalog import CatalogItem
from backend.app.models.common import Geo

T = TypeVar("T", bound=CatalogItem)

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Geo, b: Geo) -> float:
    """Great-circle distance between two points in kilometres."""
    lat1, lon1 = math.radians(a.lat), math.radians(a.lon)
    lat2, lon2 = math.radians(b.lat), math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.asin(math.sqrt(h))


def nearest(candidates: Sequence[T], origin: Geo) -> T | None:
    """Closest candidate to ``origin``; id breaks distance ties."""
    if not candidates:
        return None
    return min(candidates, key=lambda c: (haversine_km(origin, c.geo), c.id))


def pick_by_proximity(
    candidates: Sequence[T],
    origin: Geo | None,
    rng: random.Random,
    radius_km: float | None = None,
) -> T | None:
    """Pick one candidate, preferring the ones close to ``origin``.

    Selection policy:
    1. No origin known: uniform random choice.
    2. No radius: the nearest candidate.
    3. With a radius: random choice among candidates inside it, otherwise
       the nearest candidate overall.

    Args:
        candidates: Items to choose from
        origin: Current traveler location, if known
        rng: Per-request seeded random generator
        radius_km: Optional "close enough" radius

    Returns:
        The chosen candidate, or None when there are no candidates
    """
    if not candidates:
        return None

    # Stable order so the rng draws are reproducible
    ordered = sorted(candidates, key=lambda c: c.id)

    if origin is None:
        return rng.choice(ordered)

    if radius_km is None:
        return nearest(ordered, origin)

    within = [c for c in ordered if haversine_km(origin, c.geo) <= radius_km]
    if within:
        return rng.choice(within)
    return nearest(ordered, origin)

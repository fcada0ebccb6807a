"""City router - decides which city the traveler is in on each day."""

import logging
from dataclasses import dataclass

from backend.app.config import Settings
from backend.app.models.catalog import Catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteTemplate:
    """Stops that fill the middle of a route for a band of trip lengths.

    Middle day ``i`` visits ``stops[i % len(stops)]``, so short bands take
    a prefix and long bands cycle.
    """

    min_days: int
    max_days: int | None
    stops: tuple[str, ...]

    def covers(self, duration: int) -> bool:
        return duration >= self.min_days and (self.max_days is None or duration <= self.max_days)


ROUTE_TEMPLATES: tuple[RouteTemplate, ...] = (
    RouteTemplate(1, 3, ("grand-bassam",)),
    RouteTemplate(4, 7, ("grand-bassam", "assinie", "yamoussoukro", "sassandra", "man")),
    RouteTemplate(
        8,
        None,
        ("grand-bassam", "assinie", "yamoussoukro", "sassandra", "man", "korhogo", "bouake"),
    ),
)


def _template_for(duration: int) -> RouteTemplate:
    for template in ROUTE_TEMPLATES:
        if template.covers(duration):
            return template
    raise ValueError(f"No route template covers {duration} days")


def plan_city_route(duration: int, catalog: Catalog, settings: Settings) -> list[str]:
    """Build the day-by-day city route for a trip.

    The route starts and ends at the base city. For trips longer than two
    days the second-to-last day must be within the safety threshold of the
    base; otherwise that day is spent at the base instead.

    Args:
        duration: Trip length in days (>= 1)
        catalog: Reference data (stops missing from it are skipped)
        settings: Application settings

    Returns:
        List of ``duration`` city ids
    """
    if duration < 1:
        raise ValueError(f"Trip duration must be at least 1 day, got {duration}")

    base = settings.base_city
    if duration == 1:
        return [base]

    template = _template_for(duration)
    stops = [stop for stop in template.stops if catalog.has_city(stop)] or [base]
    middle = [stops[i % len(stops)] for i in range(duration - 2)]
    route = [base, *middle, base]

    # Safety pass: the day before departure stays near the airport
    if duration > 2:
        penultimate = route[duration - 2]
        hours = catalog.travel_hours(penultimate, base, settings.default_travel_hours)
        if hours > settings.safety_threshold_hours:
            logger.info(
                f"[router] Day {duration - 1} city {penultimate} is {hours}h from base, "
                f"overriding with {base}"
            )
            route[duration - 2] = base

    return route

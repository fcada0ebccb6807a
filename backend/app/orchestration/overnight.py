"""Overnight policy - stay in the day's city or head back to base."""

from backend.app.config import Settings
from backend.app.models.catalog import Catalog
from backend.app.models.common import CityCategory


def should_stay_overnight(
    current: str,
    next_city: str | None,
    travel_time_to_next: float,
    base: str,
    is_second_last_day: bool,
    catalog: Catalog,
    settings: Settings,
) -> bool:
    """Decide whether the traveler sleeps in ``current`` tonight.

    Rules are checked in order and the first match wins:
    1. Already at base: stay.
    2. Second-to-last day and base is beyond the safety threshold: return.
    3. Tomorrow's move is a long transfer: stay.
    4. Resort cities: stay.
    5. Going via base would be a long detour: stay.
    6. Otherwise return to base.
    """
    if current == base:
        return True

    default = settings.default_travel_hours
    to_base = catalog.travel_hours(current, base, default)

    if is_second_last_day and to_base > settings.safety_threshold_hours:
        return False

    if travel_time_to_next > settings.long_transfer_hours:
        return True

    if catalog.has_city(current) and catalog.city(current).category == CityCategory.resort:
        return True

    if next_city is not None:
        via_base = to_base + catalog.travel_hours(base, next_city, default)
        if via_base > settings.detour_threshold_hours:
            return True

    return False


def overnight_city(route: list[str], day: int, catalog: Catalog, settings: Settings) -> str:
    """City the traveler sleeps in after ``day`` (1-based) of ``route``."""
    current = route[day - 1]
    if day >= len(route):
        return current

    next_city = route[day]
    stays = should_stay_overnight(
        current,
        next_city,
        catalog.travel_hours(current, next_city, settings.default_travel_hours),
        settings.base_city,
        day == len(route) - 1,
        catalog,
        settings,
    )
    return current if stays else settings.base_city

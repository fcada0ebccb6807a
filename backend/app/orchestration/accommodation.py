"""Accommodation planner - one hotel per city the traveler sleeps in."""

import logging

from pydantic import BaseModel, Field

from backend.app.config import Settings
from backend.app.models.catalog import Catalog, CatalogError, Hotel
from backend.app.models.common import BudgetTier
from backend.app.orchestration.overnight import overnight_city

logger = logging.getLogger(__name__)


class AccommodationPlan(BaseModel):
    """Hotel selections for a route.

    ``nights`` lists the city slept in after each day except the last, so
    only nights actually spent somewhere accrue that hotel's rate.
    """

    base_hotel: Hotel
    accommodations: dict[str, Hotel]
    nights: list[str] = Field(default_factory=list)

    @property
    def lodging_cost(self) -> float:
        return round(sum(self.accommodations[city].cost for city in self.nights), 2)

    def hotel_for(self, city: str) -> Hotel:
        return self.accommodations.get(city, self.base_hotel)


def _pick_hotel(city: str, tier: BudgetTier, catalog: Catalog) -> Hotel | None:
    hotels = catalog.hotels_in(city)
    for hotel in hotels:
        if hotel.tier == tier:
            return hotel
    return hotels[0] if hotels else None


def plan_accommodations(
    route: list[str],
    duration: int,
    tier: BudgetTier,
    catalog: Catalog,
    settings: Settings,
) -> AccommodationPlan:
    """Select hotels for every city the traveler sleeps in.

    Args:
        route: City id per day
        duration: Trip length in days
        tier: Budget tier to match hotels against
        catalog: Reference data
        settings: Application settings

    Returns:
        AccommodationPlan with a base hotel and per-city selections

    Raises:
        CatalogError: The base city has no hotel at all.
    """
    base = settings.base_city
    base_hotel = _pick_hotel(base, tier, catalog)
    if base_hotel is None:
        raise CatalogError(f"No hotel available in base city {base}")

    nights = [overnight_city(route, day, catalog, settings) for day in range(1, duration)]

    accommodations: dict[str, Hotel] = {base: base_hotel}
    for city in nights:
        if city not in accommodations:
            accommodations[city] = _pick_hotel(city, tier, catalog) or base_hotel

    plan = AccommodationPlan(base_hotel=base_hotel, accommodations=accommodations, nights=nights)
    logger.info(
        f"[accommodation] {len(nights)} nights across {len(accommodations)} cities, "
        f"lodging ${plan.lodging_cost}"
    )
    return plan


def optimize_accommodations_for_budget(
    plan: AccommodationPlan,
    adjusted_budget: float,
    catalog: Catalog,
    settings: Settings,
) -> AccommodationPlan:
    """Downgrade hotels when lodging eats too much of the budget.

    If lodging exceeds ``lodging_budget_share`` of the budget left after
    transport, every non-Budget selection is replaced by its city's
    cheapest Budget-tier hotel. Cities without one keep their selection.
    """
    limit = settings.lodging_budget_share * adjusted_budget
    if plan.lodging_cost <= limit:
        return plan

    downgraded: dict[str, Hotel] = {}
    for city, hotel in plan.accommodations.items():
        cheapest = next((h for h in catalog.hotels_in(city) if h.tier == BudgetTier.budget), None)
        if hotel.tier != BudgetTier.budget and cheapest is not None:
            downgraded[city] = cheapest
        else:
            downgraded[city] = hotel

    result = AccommodationPlan(
        base_hotel=downgraded[settings.base_city],
        accommodations=downgraded,
        nights=list(plan.nights),
    )
    logger.info(
        f"[accommodation] Lodging ${plan.lodging_cost} over ${limit:.2f}, "
        f"downgraded to ${result.lodging_cost}"
    )
    return result

"""Transport resolver - prices inter-city transfers and intra-city hops."""

import logging

from pydantic import BaseModel, ConfigDict, Field

from backend.app.config import Settings
from backend.app.models.catalog import Catalog, CatalogError, TransportOption

logger = logging.getLogger(__name__)

FLIGHT_MODE = "Domestic Flight"


class TransportQuote(BaseModel):
    """Resolved way of making one move, with its price and duration."""

    model_config = ConfigDict(frozen=True)

    cost: float = Field(..., ge=0)
    mode: str
    hours: float = Field(..., ge=0)


def _permits(option: TransportOption, permitted_modes: list[str]) -> bool:
    return any(option.matches(label) for label in permitted_modes)


def _fallback_option(catalog: Catalog, scope: str, city: str | None = None) -> TransportOption:
    for option in sorted(catalog.transport_options, key=lambda o: (o.priority, o.label)):
        if option.scope == scope and option.is_fallback and (city is None or option.available_in(city)):
            return option
    raise CatalogError(f"Catalog has no fallback {scope}-city transport option")


def resolve_transport(
    origin: str,
    destination: str,
    permitted_modes: list[str],
    total_budget: float,
    catalog: Catalog,
    settings: Settings,
) -> TransportQuote:
    """Pick the transport for an inter-city move and price it.

    Resolution order:
    1. A permitted domestic flight serving the pair, in either direction.
    2. The highest-priority permitted inter-city option whose budget
       threshold (if any) the trip's total budget exceeds.
    3. The catalog's fallback option (public transport).

    Distance-priced options use tabulated travel hours as the distance.

    Args:
        origin: City id the traveler leaves from
        destination: City id the traveler goes to
        permitted_modes: Traveler-facing transport labels
        total_budget: Whole-trip budget, used for budget-gated options
        catalog: Reference data
        settings: Application settings

    Returns:
        TransportQuote with cost, mode label and travel hours
    """
    hours = catalog.travel_hours(origin, destination, settings.default_travel_hours)

    if any(label.startswith(FLIGHT_MODE) for label in permitted_modes):
        flight = catalog.flight_between(origin, destination)
        if flight is not None:
            return TransportQuote(
                cost=flight.price,
                mode=f"{FLIGHT_MODE} ({flight.carrier})",
                hours=flight.duration_hours,
            )

    candidates = sorted(
        (
            option
            for option in catalog.transport_options
            if option.scope == "inter"
            and option.available_in(origin)
            and option.available_in(destination)
            and _permits(option, permitted_modes)
            and (option.min_total_budget is None or total_budget > option.min_total_budget)
        ),
        key=lambda o: (o.priority, o.label),
    )
    option = candidates[0] if candidates else _fallback_option(catalog, "inter")

    cost = round(option.quote(hours, settings.max_daily_hours), 2)
    logger.debug(f"[transport] {origin} -> {destination}: {option.label} {hours}h ${cost}")
    return TransportQuote(cost=cost, mode=option.label, hours=hours)


def resolve_local_hop(
    city: str,
    permitted_modes: list[str],
    catalog: Catalog,
    settings: Settings,
) -> TransportQuote:
    """Price one short move between two places inside a city."""
    candidates = sorted(
        (
            option
            for option in catalog.transport_options
            if option.scope == "intra" and option.available_in(city) and _permits(option, permitted_modes)
        ),
        key=lambda o: (o.priority, o.label),
    )
    option = candidates[0] if candidates else _fallback_option(catalog, "intra", city)

    hours = settings.local_hop_hours
    return TransportQuote(
        cost=round(option.quote(hours, settings.max_daily_hours), 2),
        mode=option.label,
        hours=hours,
    )


def estimate_transfer_costs(
    route: list[str],
    permitted_modes: list[str],
    total_budget: float,
    catalog: Catalog,
    settings: Settings,
) -> float:
    """Rough whole-trip transport spend used to size the lodging budget.

    Prices every change of city along the route plus the two airport
    transfers. Intra-city hops are left to the daily allotments.
    """
    total = 2 * settings.airport_transfer_fee
    for origin, destination in zip(route, route[1:]):
        if origin != destination:
            quote = resolve_transport(
                origin, destination, permitted_modes, total_budget, catalog, settings
            )
            total += quote.cost
    return round(total, 2)

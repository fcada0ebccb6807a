"""Day scheduler - fills one day with timed itinerary items.

A day runs on a clock cursor starting at ``day_start_hour``. Slots are
tried in order (morning, lunch, afternoon, evening) and each is filled only
if it fits both the daily time cap and the money left for the day and the
trip. The block that closes the day (the night's lodging, or the departure
on the last day) is reserved before any slot is filled, so it always fits.
"""

import logging
from dataclasses import dataclass, field
from datetime import time

from backend.app.config import Settings
from backend.app.models.catalog import Activity, Restaurant
from backend.app.models.common import (
    ActivityCategory,
    CityCategory,
    DayWindow,
    Geo,
    ItemType,
    MealTime,
)
from backend.app.models.itinerary import DayPlan, ItineraryItem
from backend.app.orchestration.accommodation import AccommodationPlan
from backend.app.orchestration.selector import pick_by_proximity
from backend.app.orchestration.state import PlanningContext
from backend.app.orchestration.transport import (
    TransportQuote,
    resolve_local_hop,
    resolve_transport,
)

logger = logging.getLogger(__name__)

# Fixed block durations (hours)
ARRIVAL_HOURS = 2.0
AIRPORT_TRANSFER_HOURS = 1.0
CHECK_IN_HOURS = 1.0
CHECKOUT_HOURS = 1.0
DEPARTURE_HOURS = 2.0
MEAL_HOURS = 1.5
HOTEL_NIGHT_HOURS = 1.0
DEPARTURE_BLOCK_HOURS = CHECKOUT_HOURS + AIRPORT_TRANSFER_HOURS + DEPARTURE_HOURS
LAST_MORNING_MAX_HOURS = 3.0

# Clock boundaries (hour of day)
MORNING_END = 12.0
LUNCH_START = 12.0
LUNCH_LATEST = 14.0
AFTERNOON_END = 17.0
DINNER_START = 18.0
NIGHTLIFE_START = 21.0
EVENING_END = 22.0
RETURN_START = 20.0
HOTEL_START = 22.0
CHECKOUT_START = 11.0
LAST_MORNING_END = 11.0

CATEGORY_BIAS: dict[CityCategory, ActivityCategory] = {
    CityCategory.resort: ActivityCategory.beach,
    CityCategory.coastal: ActivityCategory.beach,
    CityCategory.mountain: ActivityCategory.mountain,
    CityCategory.capital: ActivityCategory.culture,
}

EPSILON = 1e-9


def clock_time(hours: float) -> time:
    """Clock time for an hour offset from midnight, wrapping past 24:00."""
    total_minutes = int(round(hours * 60))
    return time(hour=(total_minutes // 60) % 24, minute=total_minutes % 60)


@dataclass
class _DayBuilder:
    """Accumulates items for one day while tracking clock, hours and spend."""

    day: int
    city: str
    settings: Settings
    daily_budget: float
    remaining_budget: float
    cursor: float
    items: list[ItineraryItem] = field(default_factory=list)
    used_hours: float = 0.0
    # Non-lodging spend; nights are budgeted separately
    spent: float = 0.0
    reserved_hours: float = 0.0
    location: Geo | None = None

    def fits(self, hours: float) -> bool:
        limit = self.settings.max_daily_hours
        return self.used_hours + hours + self.reserved_hours <= limit + EPSILON

    def affordable(self, cost: float) -> bool:
        day_left = self.daily_budget - self.spent
        trip_left = self.remaining_budget - self.spent
        return cost <= day_left + EPSILON and cost <= trip_left + EPSILON

    def add(
        self,
        item_type: ItemType,
        description: str,
        hours: float,
        cost: float = 0.0,
        *,
        start_at: float | None = None,
        ref_id: str | None = None,
        mode: str | None = None,
        city: str | None = None,
        geo: Geo | None = None,
    ) -> ItineraryItem:
        start = self.cursor if start_at is None else max(self.cursor, start_at)
        item = ItineraryItem(
            start=clock_time(start),
            type=item_type,
            description=description,
            ref_id=ref_id,
            mode=mode,
            duration_hours=hours,
            cost=round(cost, 2),
            city=city or self.city,
        )
        self.items.append(item)
        self.cursor = start + hours
        self.used_hours += hours
        if item_type != ItemType.hotel:
            self.spent = round(self.spent + cost, 2)
        if geo is not None:
            self.location = geo
        return item

    def build(self) -> DayPlan:
        return DayPlan.from_items(self.day, self.city, self.items)


def _city_name(ctx: PlanningContext, city_id: str) -> str:
    return ctx.catalog.city(city_id).name if ctx.catalog.has_city(city_id) else city_id


def _hop_for(ctx: PlanningContext, builder: _DayBuilder, city: str, geo: Geo) -> TransportQuote | None:
    if builder.location is None or builder.location == geo:
        return None
    return resolve_local_hop(city, ctx.permitted_modes, ctx.catalog, ctx.settings)


def _activity_candidates(
    ctx: PlanningContext,
    builder: _DayBuilder,
    city: str,
    window: DayWindow,
    *,
    category: ActivityCategory | None = None,
    match_tier: bool = True,
    max_hours: float | None = None,
    biased: bool = True,
) -> list[Activity]:
    hop_allowance = ctx.settings.local_hop_hours if builder.location is not None else 0.0
    candidates = [
        a
        for a in ctx.catalog.activities_in(city)
        if a.window == window
        and a.name not in ctx.visited
        and (not match_tier or a.tier == ctx.tier)
        and (category is None or a.category == category)
        and (max_hours is None or a.duration_hours <= max_hours)
        and builder.fits(a.duration_hours + hop_allowance)
    ]

    if biased and ctx.catalog.has_city(city):
        preferred = CATEGORY_BIAS.get(ctx.catalog.city(city).category)
        matching = [a for a in candidates if a.category == preferred]
        if matching:
            return matching
    return candidates


def _try_activity(
    ctx: PlanningContext,
    builder: _DayBuilder,
    candidates: list[Activity],
    radius_km: float | None,
    start_at: float | None = None,
) -> Activity | None:
    """Pick by proximity, then schedule only if it fits and is affordable."""
    activity = pick_by_proximity(candidates, builder.location, ctx.rng, radius_km)
    if activity is None:
        return None

    hop = _hop_for(ctx, builder, activity.city, activity.geo)
    hop_hours = hop.hours if hop else 0.0
    hop_cost = hop.cost if hop else 0.0

    if not builder.fits(activity.duration_hours + hop_hours):
        return None
    if not builder.affordable(activity.cost + hop_cost):
        logger.debug(
            f"[scheduler] Day {builder.day}: skipping {activity.name} (${activity.cost}), over budget"
        )
        return None

    if hop:
        builder.add(
            ItemType.transportation,
            f"Transportation within {_city_name(ctx, activity.city)}",
            hop.hours,
            hop.cost,
            mode=hop.mode,
            city=activity.city,
        )
    builder.add(
        ItemType.activity,
        activity.name,
        activity.duration_hours,
        activity.cost,
        start_at=start_at,
        ref_id=activity.id,
        city=activity.city,
        geo=activity.geo,
    )
    ctx.mark_visited(activity.name)
    return activity


def _try_meal(
    ctx: PlanningContext,
    builder: _DayBuilder,
    meal: MealTime,
    start_at: float,
) -> Restaurant | None:
    """Schedule the nearest tier-matching restaurant for a meal."""
    candidates = [
        r for r in ctx.catalog.restaurants_in(builder.city) if r.meal == meal and r.tier == ctx.tier
    ]
    restaurant = pick_by_proximity(candidates, builder.location, ctx.rng)
    if restaurant is None:
        return None

    hop = _hop_for(ctx, builder, restaurant.city, restaurant.geo)
    hop_hours = hop.hours if hop else 0.0
    hop_cost = hop.cost if hop else 0.0

    if not builder.fits(MEAL_HOURS + hop_hours) or not builder.affordable(restaurant.cost + hop_cost):
        return None

    if hop:
        builder.add(
            ItemType.transportation,
            f"Transportation within {_city_name(ctx, restaurant.city)}",
            hop.hours,
            hop.cost,
            mode=hop.mode,
        )
    builder.add(
        ItemType.meal,
        f"{meal.value} at {restaurant.name}",
        MEAL_HOURS,
        restaurant.cost,
        start_at=start_at,
        ref_id=restaurant.id,
        geo=restaurant.geo,
    )
    return restaurant


def _arrival_block(ctx: PlanningContext, builder: _DayBuilder, accommodations: AccommodationPlan) -> None:
    hotel = accommodations.base_hotel
    builder.add(ItemType.airport, "Arrival at airport", ARRIVAL_HOURS)
    builder.add(
        ItemType.transportation,
        f"Transfer to {hotel.name}",
        AIRPORT_TRANSFER_HOURS,
        ctx.settings.airport_transfer_fee,
    )
    builder.add(
        ItemType.hotel,
        f"Check-in at {hotel.name}",
        CHECK_IN_HOURS,
        ref_id=hotel.id,
        geo=hotel.geo,
    )


def _close_day(
    ctx: PlanningContext,
    builder: _DayBuilder,
    sleep_city: str,
    return_quote: TransportQuote | None,
    accommodations: AccommodationPlan,
) -> None:
    builder.reserved_hours = 0.0
    if return_quote is not None:
        builder.add(
            ItemType.return_trip,
            f"Return to {_city_name(ctx, sleep_city)}",
            return_quote.hours,
            return_quote.cost,
            start_at=RETURN_START,
            mode=return_quote.mode,
        )
    hotel = accommodations.hotel_for(sleep_city)
    builder.add(
        ItemType.hotel,
        f"Overnight at {hotel.name}",
        HOTEL_NIGHT_HOURS,
        hotel.cost,
        start_at=HOTEL_START,
        ref_id=hotel.id,
        city=sleep_city,
        geo=hotel.geo,
    )


def _schedule_departure_day(
    ctx: PlanningContext,
    builder: _DayBuilder,
    slept: str,
    accommodations: AccommodationPlan,
) -> None:
    settings = ctx.settings
    base = ctx.base
    travel = None
    if slept != base:
        travel = resolve_transport(
            slept, base, ctx.permitted_modes, ctx.total_budget, ctx.catalog, settings
        )

    hotel = accommodations.hotel_for(slept)
    if builder.location is None:
        builder.location = hotel.geo
    builder.reserved_hours = (travel.hours if travel else 0.0) + DEPARTURE_BLOCK_HOURS

    # One short morning outing near where the traveler slept
    if builder.cursor < LAST_MORNING_END:
        candidates = _activity_candidates(
            ctx,
            builder,
            slept,
            DayWindow.morning,
            match_tier=False,
            max_hours=LAST_MORNING_MAX_HOURS,
            biased=False,
        )
        _try_activity(ctx, builder, candidates, settings.morning_radius_km)

    builder.reserved_hours = 0.0
    builder.add(
        ItemType.hotel,
        f"Check-out from {hotel.name}",
        CHECKOUT_HOURS,
        start_at=CHECKOUT_START,
        ref_id=hotel.id,
        city=slept,
    )
    if travel is not None:
        builder.add(
            ItemType.travel,
            f"Travel from {_city_name(ctx, slept)} to {_city_name(ctx, base)}",
            travel.hours,
            travel.cost,
            mode=travel.mode,
            city=base,
        )
    builder.add(
        ItemType.transportation,
        "Transfer to airport",
        AIRPORT_TRANSFER_HOURS,
        settings.airport_transfer_fee,
        city=base,
    )
    builder.add(ItemType.airport, "Departure from airport", DEPARTURE_HOURS, city=base)


def _schedule_evening(ctx: PlanningContext, builder: _DayBuilder) -> None:
    city = ctx.catalog.city(builder.city) if ctx.catalog.has_city(builder.city) else None
    nightlife = []
    if city is not None and city.nightlife:
        nightlife = _activity_candidates(
            ctx, builder, builder.city, DayWindow.evening, category=ActivityCategory.nightlife
        )

    if nightlife:
        _try_meal(ctx, builder, MealTime.dinner, DINNER_START)
        # Dinner may have used the time; recheck what still fits
        nightlife = [a for a in nightlife if a.name not in ctx.visited and builder.fits(a.duration_hours)]
        _try_activity(ctx, builder, nightlife, None, start_at=NIGHTLIFE_START)
        return

    candidates = _activity_candidates(ctx, builder, builder.city, DayWindow.evening, biased=False)
    _try_activity(ctx, builder, candidates, None, start_at=DINNER_START)


def schedule_day(
    ctx: PlanningContext,
    day: int,
    city: str,
    daily_budget: float,
    remaining_budget: float,
    accommodations: AccommodationPlan,
) -> DayPlan:
    """Build the itinerary for one day of the trip.

    Args:
        ctx: Per-request planning context (route, tier, rng, visited set)
        day: 1-based day number
        city: City the day is spent in
        daily_budget: Non-lodging allotment for this day
        remaining_budget: Non-lodging money left for the rest of the trip
        accommodations: Hotel selections and where each night is slept

    Returns:
        DayPlan whose items never exceed ``max_daily_hours`` in total
    """
    settings = ctx.settings
    builder = _DayBuilder(
        day=day,
        city=city,
        settings=settings,
        daily_budget=daily_budget,
        remaining_budget=remaining_budget,
        cursor=settings.day_start_hour,
    )
    slept = accommodations.nights[day - 2] if day > 1 else None

    if day == 1:
        _arrival_block(ctx, builder, accommodations)

    if day == ctx.duration:
        _schedule_departure_day(ctx, builder, slept or city, accommodations)
        return builder.build()

    # Reserve tonight's lodging (and the ride back to base, if any)
    sleep_city = accommodations.nights[day - 1]
    return_quote = None
    if sleep_city != city:
        return_quote = resolve_transport(
            city, sleep_city, ctx.permitted_modes, ctx.total_budget, ctx.catalog, settings
        )
    builder.reserved_hours = HOTEL_NIGHT_HOURS + (return_quote.hours if return_quote else 0.0)

    if slept is not None and slept != city:
        transfer = resolve_transport(
            slept, city, ctx.permitted_modes, ctx.total_budget, ctx.catalog, settings
        )
        destination = ctx.catalog.city(city)
        if not builder.fits(transfer.hours):
            # Overflow: the transfer fills the day, leaving only tonight's
            # closing block (the ride back to base, if any, and the hotel)
            logger.info(f"[scheduler] Day {day}: {transfer.hours}h transfer to {city} fills the day")
            closing_hours = builder.reserved_hours
            builder.reserved_hours = 0.0
            builder.add(
                ItemType.travel,
                f"Travel from {_city_name(ctx, slept)} to {destination.name}",
                max(0.0, min(transfer.hours, settings.max_daily_hours - closing_hours)),
                transfer.cost,
                mode=transfer.mode,
                geo=destination.geo,
            )
            _close_day(ctx, builder, sleep_city, return_quote, accommodations)
            return builder.build()

        builder.add(
            ItemType.travel,
            f"Travel from {_city_name(ctx, slept)} to {destination.name}",
            transfer.hours,
            transfer.cost,
            mode=transfer.mode,
            geo=destination.geo,
        )
    elif day > 1:
        builder.location = accommodations.hotel_for(city).geo

    if builder.cursor < MORNING_END:
        candidates = _activity_candidates(ctx, builder, city, DayWindow.morning)
        _try_activity(ctx, builder, candidates, settings.morning_radius_km)

    if builder.cursor <= LUNCH_LATEST:
        _try_meal(ctx, builder, MealTime.lunch, LUNCH_START)

    if builder.cursor < AFTERNOON_END:
        candidates = _activity_candidates(ctx, builder, city, DayWindow.afternoon)
        _try_activity(ctx, builder, candidates, settings.afternoon_radius_km)

    if builder.cursor < EVENING_END:
        _schedule_evening(ctx, builder)

    _close_day(ctx, builder, sleep_city, return_quote, accommodations)

    plan = builder.build()
    logger.debug(
        f"[scheduler] Day {day} in {city}: {len(plan.items)} items, "
        f"{plan.total_hours}h, ${plan.total_cost}"
    )
    return plan

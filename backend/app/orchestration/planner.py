"""Trip planner - runs every planning step for one request."""

import logging
import time
from datetime import time as clock

from pydantic import ValidationError

from backend.app.adapters.fixtures import get_default_catalog, to_catalog_units
from backend.app.config import Settings, get_settings
from backend.app.models.catalog import Catalog, CatalogError
from backend.app.models.common import BudgetTier, Currency, ItemType
from backend.app.models.itinerary import DayPlan, ItineraryItem, TripPlan, summarize_costs
from backend.app.models.request import PlanRequest
from backend.app.orchestration.accommodation import (
    optimize_accommodations_for_budget,
    plan_accommodations,
)
from backend.app.orchestration.reconciler import reconcile_budget
from backend.app.orchestration.router import plan_city_route
from backend.app.orchestration.scheduler import schedule_day
from backend.app.orchestration.state import PlanningContext
from backend.app.orchestration.transport import estimate_transfer_costs
from backend.app.utils.logging import StructuredPlanLogger
from backend.app.utils.metrics import PrometheusPlanMetrics
from backend.app.verification.verifiers import verify_trip_plan

logger = logging.getLogger(__name__)

_metrics = PrometheusPlanMetrics()
_plan_logger = StructuredPlanLogger()

# Fallback plan shares of the whole budget, spread over the trip
FALLBACK_ACTIVITY_SHARE = 0.10
FALLBACK_MEAL_SHARE = 0.05


def budget_tier_for(total_budget: float, settings: Settings) -> BudgetTier:
    """Map a whole-trip budget onto a price tier."""
    if total_budget < settings.budget_tier_budget_max:
        return BudgetTier.budget
    if total_budget < settings.budget_tier_mid_max:
        return BudgetTier.mid
    return BudgetTier.luxury


def _build_plan(
    request: PlanRequest,
    budget: float,
    seed: int,
    catalog: Catalog,
    settings: Settings,
) -> TripPlan:
    duration = request.duration_days
    modes = list(request.permitted_transport_modes)
    tier = budget_tier_for(budget, settings)

    route = plan_city_route(duration, catalog, settings)
    logger.info(f"[planner] Route for {duration} days ({tier.value}): {' -> '.join(route)}")

    ctx = PlanningContext(
        catalog=catalog,
        settings=settings,
        route=route,
        tier=tier,
        total_budget=budget,
        permitted_modes=modes,
        seed=seed,
    )

    # Lodging is sized against what is left after moving between cities
    transfer_estimate = estimate_transfer_costs(route, modes, budget, catalog, settings)
    accommodations = plan_accommodations(route, duration, tier, catalog, settings)
    accommodations = optimize_accommodations_for_budget(
        accommodations, budget - transfer_estimate, catalog, settings
    )

    daily_budget = max(0.0, (budget - accommodations.lodging_cost) / duration)

    day_plans: list[DayPlan] = []
    for day, city in enumerate(route, start=1):
        upcoming_lodging = sum(
            accommodations.hotel_for(night).cost for night in accommodations.nights[day - 1 :]
        )
        remaining = max(0.0, budget - ctx.spent - upcoming_lodging)
        day_plan = schedule_day(ctx, day, city, daily_budget, remaining, accommodations)
        ctx.record_spend(day_plan.total_cost)
        day_plans.append(day_plan)

    lodging, total, hours = summarize_costs(day_plans)
    plan = TripPlan(
        route=route,
        budget_tier=tier,
        base_hotel=accommodations.base_hotel,
        accommodations=accommodations.accommodations,
        day_plans=day_plans,
        lodging_cost=lodging,
        total_cost=total,
        total_hours=hours,
        budget=budget,
        seed=seed,
    )
    return reconcile_budget(plan, settings)


def build_fallback_plan(
    duration: int,
    budget: float,
    seed: int,
    catalog: Catalog | None,
    settings: Settings,
) -> TripPlan:
    """Minimal plan used when the real planner cannot run.

    Every day stays in the base city with one exploration block and one
    meal. The cheapest base hotel is used when the catalog has one.
    """
    base = settings.base_city
    hotels = catalog.hotels_in(base) if catalog is not None else []
    hotel = hotels[0] if hotels else None

    activity_cost = round(budget * FALLBACK_ACTIVITY_SHARE / duration, 2)
    meal_cost = round(budget * FALLBACK_MEAL_SHARE / duration, 2)

    day_plans: list[DayPlan] = []
    for day in range(1, duration + 1):
        is_last = day == duration
        items = [
            ItineraryItem(
                start=clock(9, 0),
                type=ItemType.hotel,
                description="Airport arrival and hotel check-in" if day == 1 else "Hotel breakfast",
                ref_id=hotel.id if hotel else None,
                duration_hours=2.0,
                cost=0.0,
                city=base,
            ),
            ItineraryItem(
                start=clock(11, 0),
                type=ItemType.activity,
                description=f"City exploration: day {day}",
                duration_hours=4.0,
                cost=activity_cost,
                city=base,
            ),
            ItineraryItem(
                start=clock(15, 0),
                type=ItemType.meal,
                description="Local restaurant",
                duration_hours=1.5,
                cost=meal_cost,
                city=base,
            ),
        ]
        if is_last:
            items.append(
                ItineraryItem(
                    start=clock(18, 0),
                    type=ItemType.airport,
                    description="Airport departure",
                    duration_hours=2.0,
                    cost=settings.airport_transfer_fee,
                    city=base,
                )
            )
        elif hotel is not None:
            items.append(
                ItineraryItem(
                    start=clock(22, 0),
                    type=ItemType.hotel,
                    description=f"Overnight at {hotel.name}",
                    ref_id=hotel.id,
                    duration_hours=1.0,
                    cost=hotel.cost,
                    city=base,
                )
            )
        day_plans.append(DayPlan.from_items(day, base, items))

    lodging, total, hours = summarize_costs(day_plans)
    return TripPlan(
        route=[base] * duration,
        budget_tier=budget_tier_for(budget, settings),
        base_hotel=hotel,
        accommodations={base: hotel} if hotel else {},
        day_plans=day_plans,
        lodging_cost=lodging,
        total_cost=total,
        total_hours=hours,
        budget=budget,
        seed=seed,
        is_fallback=True,
    )


def plan_trip(
    request: PlanRequest,
    catalog: Catalog | None = None,
    settings: Settings | None = None,
) -> TripPlan:
    """Plan a whole trip for a request.

    Pipeline: budget conversion, tier, city route, accommodations with
    lodging repair, day-by-day scheduling, budget reconciliation and
    verification. Catalog problems never surface to the caller; they are
    logged and answered with a minimal fallback plan.

    Args:
        request: Validated plan request
        catalog: Optional catalog to plan against (defaults to fixtures)
        settings: Optional settings (defaults to environment settings)

    Returns:
        TripPlan with violations attached
    """
    settings = settings or get_settings()
    seed = request.seed if request.seed is not None else settings.rng_seed
    start = time.perf_counter()
    # Until converted, only a USD amount is in catalog units
    budget = request.total_budget if request.currency == Currency.usd else 0.0

    try:
        catalog = catalog or get_default_catalog()
        budget = to_catalog_units(request.total_budget, request.currency, settings.fixtures_dir)
        plan = _build_plan(request, budget, seed, catalog, settings)
        outcome = "reconciled" if plan.reconciled else "success"
        error_reason = None
    except (CatalogError, ValidationError, KeyError, ValueError) as e:
        logger.error(f"[planner] Planning failed, using fallback plan: {e}", exc_info=True)
        plan = build_fallback_plan(request.duration_days, budget, seed, catalog, settings)
        outcome = "fallback"
        error_reason = type(e).__name__

    plan = plan.model_copy(update={"violations": verify_trip_plan(plan, settings)})

    latency_ms = (time.perf_counter() - start) * 1000
    _metrics.inc_outcome(outcome)
    _metrics.record_latency(outcome, latency_ms)
    _metrics.inc_trimmed(len(plan.removed_items))
    _plan_logger.log_plan(
        seed=seed,
        duration_days=request.duration_days,
        budget=budget,
        outcome=outcome,
        latency_ms=latency_ms,
        total_cost=plan.total_cost,
        removed_items=len(plan.removed_items),
        error_reason=error_reason,
    )
    return plan

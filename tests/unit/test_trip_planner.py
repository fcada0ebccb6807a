"""Tests for the end-to-end trip planner."""

import dataclasses
from pathlib import Path

import pytest

from backend.app.config import Settings
from backend.app.models import BudgetTier, Catalog, Currency, ItemType, PlanRequest
from backend.app.orchestration.planner import budget_tier_for, build_fallback_plan, plan_trip


def make_request(
    duration_days: int,
    total_budget: float,
    modes: list[str] | None = None,
    seed: int = 42,
    currency: Currency = Currency.usd,
) -> PlanRequest:
    """Create a plan request."""
    return PlanRequest(
        duration_days=duration_days,
        total_budget=total_budget,
        currency=currency,
        permitted_transport_modes=modes or ["Public Transport"],
        seed=seed,
    )


@pytest.mark.parametrize(
    ("budget", "tier"),
    [
        (100, BudgetTier.budget),
        (799.99, BudgetTier.budget),
        (800, BudgetTier.mid),
        (1999, BudgetTier.mid),
        (2000, BudgetTier.luxury),
    ],
)
def test_budget_tier_bands(budget: float, tier: BudgetTier, settings: Settings) -> None:
    """Test the budget-to-tier mapping."""
    assert budget_tier_for(budget, settings) == tier


def test_same_seed_same_plan(catalog: Catalog, settings: Settings) -> None:
    """Test that planning is deterministic for a seed."""
    request = make_request(8, 2500, ["Private Car with Driver", "Taxi"], seed=5)

    first = plan_trip(request, catalog=catalog, settings=settings)
    second = plan_trip(request, catalog=catalog, settings=settings)

    assert first.day_plans == second.day_plans
    assert first.total_cost == second.total_cost


@pytest.mark.parametrize("duration", range(1, 16))
@pytest.mark.parametrize("budget", [1000, 5000])
def test_plan_shape_across_trips(duration: int, budget: float, catalog: Catalog, settings: Settings) -> None:
    """Test hour cap, variety, route shape and totals for many trips."""
    plan = plan_trip(make_request(duration, budget), catalog=catalog, settings=settings)

    assert not plan.is_fallback
    assert len(plan.day_plans) == duration
    assert plan.route[0] == plan.route[-1] == "abidjan"
    assert all(day.total_hours <= settings.max_daily_hours for day in plan.day_plans)

    names = [name for day in plan.day_plans for name in day.activity_names()]
    assert len(names) == len(set(names))

    assert plan.total_cost == pytest.approx(sum(day.total_cost for day in plan.day_plans))
    assert all(item.cost >= 0 for day in plan.day_plans for item in day.items)
    assert all(v.code != "DAY_OVER_TIME_CAP" for v in plan.violations)


def test_single_day_plan(catalog: Catalog, settings: Settings) -> None:
    """Test that a one-day trip is arrival plus departure at base."""
    plan = plan_trip(make_request(1, 500), catalog=catalog, settings=settings)

    assert plan.route == ["abidjan"]
    assert plan.day_plans[0].activity_names() == []
    assert {item.type for item in plan.day_plans[0].items} <= {
        ItemType.airport,
        ItemType.transportation,
        ItemType.hotel,
    }


def test_five_day_trip_applies_forced_return(catalog: Catalog, settings: Settings) -> None:
    """Test the 4-7 day template with day four pulled back to base."""
    plan = plan_trip(make_request(5, 1000), catalog=catalog, settings=settings)

    assert plan.route == ["abidjan", "grand-bassam", "assinie", "abidjan", "abidjan"]
    assert plan.budget_tier == BudgetTier.mid
    assert plan.total_cost <= plan.budget


def test_hotel_nights_make_up_lodging(catalog: Catalog, settings: Settings) -> None:
    """Test that lodging cost is the nightly hotel items."""
    plan = plan_trip(make_request(4, 1500), catalog=catalog, settings=settings)

    nights = [
        item
        for day in plan.day_plans
        for item in day.items
        if item.type == ItemType.hotel and item.description.startswith("Overnight")
    ]
    assert len(nights) == 3
    assert plan.lodging_cost == pytest.approx(sum(item.cost for item in nights))
    assert plan.base_hotel is not None
    assert plan.accommodations["abidjan"] == plan.base_hotel


def test_budget_converted_from_currency(catalog: Catalog, settings: Settings) -> None:
    """Test that non-USD budgets are converted with the fixture FX rates."""
    plan = plan_trip(
        make_request(3, 850, currency=Currency.eur), catalog=catalog, settings=settings
    )

    assert plan.budget == 1000.0
    assert plan.budget_tier == BudgetTier.mid


def test_catalog_error_returns_fallback_plan(small_catalog: Catalog, settings: Settings) -> None:
    """Test that a catalog without base hotels yields the fallback plan."""
    catalog = dataclasses.replace(
        small_catalog,
        hotels=tuple(h for h in small_catalog.hotels if h.city != "abidjan"),
    )

    plan = plan_trip(make_request(3, 600), catalog=catalog, settings=settings)

    assert plan.is_fallback
    assert plan.route == ["abidjan", "abidjan", "abidjan"]
    assert plan.base_hotel is None
    assert len(plan.day_plans) == 3


def test_fallback_plan_shape(small_catalog: Catalog, settings: Settings) -> None:
    """Test the minimal fallback itinerary."""
    plan = build_fallback_plan(3, 900, 42, small_catalog, settings)

    assert plan.is_fallback
    assert plan.base_hotel is not None
    assert plan.base_hotel.id == "abj-ibis"
    for day in plan.day_plans:
        assert day.city == "abidjan"
        assert len(day.activity_names()) == 1
        assert sum(1 for item in day.items if item.type == ItemType.meal) == 1
        assert day.total_hours <= settings.max_daily_hours
    assert plan.day_plans[-1].items[-1].type == ItemType.airport
    assert plan.lodging_cost == 100
    assert plan.total_cost <= plan.budget


def test_fallback_plan_without_catalog(settings: Settings) -> None:
    """Test that the fallback plan works with no catalog at all."""
    plan = build_fallback_plan(2, 500, 42, None, settings)

    assert plan.base_hotel is None
    assert plan.accommodations == {}
    assert plan.lodging_cost == 0


def test_violations_attached(catalog: Catalog, settings: Settings) -> None:
    """Test that verifiers run on the returned plan."""
    plan = plan_trip(make_request(15, 300), catalog=catalog, settings=settings)

    # Fifteen nights of lodging cannot fit in 300
    assert "OVER_BUDGET" in [v.code for v in plan.violations]


def test_unconvertible_budget_sizes_fallback_from_zero(
    small_catalog: Catalog, tmp_path: Path
) -> None:
    """Test that a budget without an FX rate never prices the fallback in raw francs."""
    settings = Settings(base_city="abidjan", fixtures_dir=str(tmp_path))

    plan = plan_trip(
        make_request(3, 1_500_000, currency=Currency.xof), catalog=small_catalog, settings=settings
    )

    assert plan.is_fallback
    assert plan.budget == 0.0
    discretionary = [
        item
        for day in plan.day_plans
        for item in day.items
        if item.type in (ItemType.activity, ItemType.meal)
    ]
    assert discretionary
    assert all(item.cost == 0 for item in discretionary)
    assert plan.total_cost == 2 * 50 + settings.airport_transfer_fee

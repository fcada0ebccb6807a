"""Tests for trip plan verifiers."""

from datetime import time

from backend.app.config import Settings
from backend.app.models import (
    BudgetTier,
    DayPlan,
    ItemType,
    ItineraryItem,
    TripPlan,
    ViolationKind,
    ViolationSeverity,
)
from backend.app.models.itinerary import summarize_costs
from backend.app.verification.verifiers import (
    verify_budget,
    verify_day_hours,
    verify_departure,
    verify_trip_plan,
    verify_variety,
)


def make_item(
    item_type: ItemType, description: str, cost: float = 0.0, hours: float = 1.0
) -> ItineraryItem:
    """Create an itinerary item in Abidjan."""
    return ItineraryItem(
        start=time(9, 0),
        type=item_type,
        description=description,
        duration_hours=hours,
        cost=cost,
        city="abidjan",
    )


def make_plan(days: list[list[ItineraryItem]], budget: float = 1000.0) -> TripPlan:
    """Create a trip plan from per-day items."""
    day_plans = [DayPlan.from_items(i, "abidjan", items) for i, items in enumerate(days, start=1)]
    lodging, total, hours = summarize_costs(day_plans)
    return TripPlan(
        route=["abidjan"] * len(days),
        budget_tier=BudgetTier.mid,
        base_hotel=None,
        accommodations={},
        day_plans=day_plans,
        lodging_cost=lodging,
        total_cost=total,
        total_hours=hours,
        budget=budget,
        seed=42,
    )


def test_over_budget_is_blocking(settings: Settings) -> None:
    """Test that spending above budget is a blocking violation."""
    plan = make_plan([[make_item(ItemType.activity, "Golf", 1200)]])

    violations = verify_budget(plan, settings)

    assert len(violations) == 1
    assert violations[0].code == "OVER_BUDGET"
    assert violations[0].kind == ViolationKind.BUDGET
    assert violations[0].severity == ViolationSeverity.BLOCKING
    assert violations[0].details["ratio"] == 1.2


def test_near_budget_limit_is_advisory(settings: Settings) -> None:
    """Test that spending above 80% of budget is flagged as advisory."""
    plan = make_plan([[make_item(ItemType.activity, "Golf", 850)]])

    violations = verify_budget(plan, settings)

    assert [v.code for v in violations] == ["NEAR_BUDGET_LIMIT"]
    assert violations[0].severity == ViolationSeverity.ADVISORY


def test_comfortably_within_budget_passes(settings: Settings) -> None:
    """Test that 80% or less of the budget raises nothing."""
    plan = make_plan([[make_item(ItemType.activity, "Golf", 800)]])

    assert verify_budget(plan, settings) == []


def test_day_over_time_cap(settings: Settings) -> None:
    """Test that a day above the hour cap is reported."""
    plan = make_plan(
        [
            [make_item(ItemType.activity, "Hike", hours=6)],
            [make_item(ItemType.activity, "Safari", hours=8), make_item(ItemType.hotel, "Night", hours=3)],
        ]
    )

    violations = verify_day_hours(plan, settings)

    assert len(violations) == 1
    assert violations[0].code == "DAY_OVER_TIME_CAP"
    assert violations[0].affected_days == [2]


def test_repeated_activity(settings: Settings) -> None:
    """Test that an activity scheduled twice is reported."""
    plan = make_plan(
        [
            [make_item(ItemType.activity, "Basilica")],
            [make_item(ItemType.activity, "Market")],
            [make_item(ItemType.activity, "Basilica")],
        ]
    )

    violations = verify_variety(plan)

    assert len(violations) == 1
    assert violations[0].code == "REPEATED_ACTIVITY"
    assert violations[0].affected_days == [1, 3]
    assert violations[0].details["activities"] == ["Basilica"]


def test_long_departure_day_travel(settings: Settings) -> None:
    """Test that a long ride back on departure day is flagged."""
    plan = make_plan(
        [
            [make_item(ItemType.activity, "Hike")],
            [make_item(ItemType.travel, "Travel from Man to Abidjan", hours=7)],
        ]
    )

    violations = verify_departure(plan, settings)

    assert [v.code for v in violations] == ["DEPARTURE_UNSAFE"]
    assert violations[0].affected_days == [2]


def test_clean_plan_has_no_violations(settings: Settings) -> None:
    """Test that a valid plan passes every verifier."""
    plan = make_plan(
        [
            [make_item(ItemType.activity, "Museum", 100, 2)],
            [make_item(ItemType.travel, "Travel from Grand-Bassam to Abidjan", 5, 1)],
        ]
    )

    assert verify_trip_plan(plan, settings) == []

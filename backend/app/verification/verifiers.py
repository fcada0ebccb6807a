"""Verification functions for budget, time and variety constraints on trip plans."""

from collections import defaultdict

from backend.app.config import Settings
from backend.app.models.common import ItemType
from backend.app.models.itinerary import TripPlan
from backend.app.models.violations import Violation, ViolationKind, ViolationSeverity


def verify_budget(plan: TripPlan, settings: Settings) -> list[Violation]:
    """Verify that the total trip cost fits within budget.

    Args:
        plan: Trip plan with computed totals
        settings: Settings carrying the near-limit ratio

    Returns:
        List of violations (empty if comfortably within budget, or single violation)
    """
    budget = plan.budget
    if budget <= 0:
        return []

    total_cost = plan.total_cost
    ratio = total_cost / budget
    all_days = [day_plan.day for day_plan in plan.day_plans]

    # Case 1: Over budget - BLOCKING
    if total_cost > budget:
        return [
            Violation(
                kind=ViolationKind.BUDGET,
                code="OVER_BUDGET",
                message="Total trip cost exceeds the stated budget.",
                severity=ViolationSeverity.BLOCKING,
                affected_days=all_days,
                details={
                    "total_cost": total_cost,
                    "budget": budget,
                    "ratio": round(ratio, 3),
                },
            )
        ]

    # Case 2: Close to the limit - ADVISORY
    if ratio > settings.near_budget_ratio:
        return [
            Violation(
                kind=ViolationKind.BUDGET,
                code="NEAR_BUDGET_LIMIT",
                message="Total trip cost is close to the stated budget.",
                severity=ViolationSeverity.ADVISORY,
                affected_days=all_days,
                details={
                    "total_cost": total_cost,
                    "budget": budget,
                    "ratio": round(ratio, 3),
                },
            )
        ]

    # Case 3: Within budget - no violation
    return []


def verify_day_hours(plan: TripPlan, settings: Settings) -> list[Violation]:
    """Verify that no day schedules more than the daily hour cap."""
    over = [
        day_plan for day_plan in plan.day_plans if day_plan.total_hours > settings.max_daily_hours + 1e-9
    ]
    if not over:
        return []

    return [
        Violation(
            kind=ViolationKind.FEASIBILITY,
            code="DAY_OVER_TIME_CAP",
            message=f"Some days schedule more than {settings.max_daily_hours:g} hours.",
            severity=ViolationSeverity.BLOCKING,
            affected_days=[day_plan.day for day_plan in over],
            details={"hours": {str(day_plan.day): day_plan.total_hours for day_plan in over}},
        )
    ]


def verify_variety(plan: TripPlan) -> list[Violation]:
    """Verify that no activity is scheduled twice across the trip."""
    days_by_name: dict[str, list[int]] = defaultdict(list)
    for day_plan in plan.day_plans:
        for name in day_plan.activity_names():
            days_by_name[name].append(day_plan.day)

    repeated = {name: days for name, days in days_by_name.items() if len(days) > 1}
    if not repeated:
        return []

    return [
        Violation(
            kind=ViolationKind.VARIETY,
            code="REPEATED_ACTIVITY",
            message="The same activity appears more than once in the trip.",
            severity=ViolationSeverity.ADVISORY,
            affected_days=sorted({day for days in repeated.values() for day in days}),
            details={"activities": sorted(repeated)},
        )
    ]


def verify_departure(plan: TripPlan, settings: Settings) -> list[Violation]:
    """Verify that departure day does not start with a long trip back to base."""
    if not plan.day_plans:
        return []

    last = plan.day_plans[-1]
    travel_hours = sum(item.duration_hours for item in last.items if item.type == ItemType.travel)
    if travel_hours <= settings.safety_threshold_hours:
        return []

    return [
        Violation(
            kind=ViolationKind.FEASIBILITY,
            code="DEPARTURE_UNSAFE",
            message="Departure day needs a long transfer back to the airport city.",
            severity=ViolationSeverity.ADVISORY,
            affected_days=[last.day],
            details={"travel_hours": travel_hours},
        )
    ]


def verify_trip_plan(plan: TripPlan, settings: Settings) -> list[Violation]:
    """Run every plan verifier and collect their violations."""
    violations: list[Violation] = []
    violations.extend(verify_budget(plan, settings))
    violations.extend(verify_day_hours(plan, settings))
    violations.extend(verify_variety(plan))
    violations.extend(verify_departure(plan, settings))
    return violations

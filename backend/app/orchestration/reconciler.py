"""Budget reconciler - trims expensive activities when a plan overspends."""

import logging

from backend.app.config import Settings
from backend.app.models.common import ItemType
from backend.app.models.itinerary import DayPlan, TripPlan, summarize_costs

logger = logging.getLogger(__name__)


def reconcile_budget(plan: TripPlan, settings: Settings) -> TripPlan:
    """Bring a plan back under budget by dropping pricey activities.

    Days are swept in order. Within a day the most expensive Activity
    costing more than ``reconcile_activity_floor`` is removed, then the
    next, until the overage is covered or the day has none left. Travel,
    lodging, airport, transport and meal items are never touched.

    Args:
        plan: Plan to check; it is not modified
        settings: Application settings

    Returns:
        The same plan when within budget, otherwise a corrected copy with
        ``reconciled`` set and ``removed_items`` listing what was dropped
    """
    overage = round(plan.total_cost - plan.budget, 2)
    if overage <= 0:
        return plan

    logger.info(f"[reconciler] Plan ${plan.total_cost} over budget ${plan.budget} by ${overage}")

    floor = settings.reconcile_activity_floor
    removed: list[str] = []
    day_plans: list[DayPlan] = []

    for day_plan in plan.day_plans:
        items = list(day_plan.items)
        while overage > 0:
            pricey = [
                item for item in items if item.type == ItemType.activity and item.cost > floor
            ]
            if not pricey:
                break
            victim = max(pricey, key=lambda item: item.cost)
            items.remove(victim)
            removed.append(victim.description)
            overage = round(overage - victim.cost, 2)
            logger.debug(f"[reconciler] Day {day_plan.day}: removed {victim.description} (${victim.cost})")

        if len(items) == len(day_plan.items):
            day_plans.append(day_plan)
        else:
            day_plans.append(DayPlan.from_items(day_plan.day, day_plan.city, items))

    lodging, total, hours = summarize_costs(day_plans)

    if overage > 0:
        logger.warning(
            f"[reconciler] Still ${overage} over budget after removing {len(removed)} activities"
        )

    return plan.model_copy(
        update={
            "day_plans": day_plans,
            "lodging_cost": lodging,
            "total_cost": total,
            "total_hours": hours,
            "reconciled": True,
            "removed_items": [*plan.removed_items, *removed],
        }
    )

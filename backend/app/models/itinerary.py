"""Itinerary models - final output for user consumption."""

from datetime import time

from pydantic import BaseModel, Field

from backend.app.models.catalog import Hotel
from backend.app.models.common import BudgetTier, ItemType
from backend.app.models.violations import Violation


class ItineraryItem(BaseModel):
    """Single scheduled entry in a day."""

    start: time
    type: ItemType
    description: str
    ref_id: str | None = None
    mode: str | None = None
    duration_hours: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    city: str


class DayPlan(BaseModel):
    """Itinerary for a single day."""

    day: int = Field(..., ge=1)
    city: str
    items: list[ItineraryItem]
    total_cost: float = Field(..., ge=0)
    total_hours: float = Field(..., ge=0)

    @classmethod
    def from_items(cls, day: int, city: str, items: list[ItineraryItem]) -> "DayPlan":
        """Build a DayPlan with aggregates computed from its items."""
        return cls(
            day=day,
            city=city,
            items=list(items),
            total_cost=round(sum(item.cost for item in items), 2),
            total_hours=sum(item.duration_hours for item in items),
        )

    def activity_names(self) -> list[str]:
        return [item.description for item in self.items if item.type == ItemType.activity]


class TripPlan(BaseModel):
    """Complete trip plan.

    ``lodging_cost`` is the part of ``total_cost`` spent on nightly Hotel
    items; hotel nights are carried inside the day plans, so
    ``total_cost`` is the sum of the day totals.
    """

    route: list[str]
    budget_tier: BudgetTier
    base_hotel: Hotel | None
    accommodations: dict[str, Hotel]
    day_plans: list[DayPlan]
    lodging_cost: float = Field(..., ge=0)
    total_cost: float = Field(..., ge=0)
    total_hours: float = Field(..., ge=0)
    budget: float
    seed: int
    is_fallback: bool = False
    reconciled: bool = False
    removed_items: list[str] = Field(default_factory=list)
    violations: list[Violation] = Field(default_factory=list)

    @property
    def duration_days(self) -> int:
        return len(self.day_plans)


def summarize_costs(day_plans: list[DayPlan]) -> tuple[float, float, float]:
    """Return (lodging_cost, total_cost, total_hours) across day plans."""
    lodging = sum(
        item.cost for plan in day_plans for item in plan.items if item.type == ItemType.hotel
    )
    total = sum(plan.total_cost for plan in day_plans)
    hours = sum(plan.total_hours for plan in day_plans)
    return round(lodging, 2), round(total, 2), hours

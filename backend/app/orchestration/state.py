"""Per-request planning context shared by the planning steps."""

import random
from dataclasses import dataclass, field

from backend.app.config import Settings
from backend.app.models.catalog import Catalog
from backend.app.models.common import BudgetTier


@dataclass
class PlanningContext:
    """Mutable state for one ``plan_trip`` call.

    Created fresh per request and passed explicitly to every step.
    """

    catalog: Catalog
    settings: Settings
    route: list[str]
    tier: BudgetTier
    total_budget: float
    permitted_modes: list[str]
    seed: int
    rng: random.Random = field(init=False)

    # Activity names already scheduled anywhere in the trip
    visited: set[str] = field(default_factory=set)
    # Running spend across scheduled days (lodging included)
    spent: float = 0.0

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    @property
    def duration(self) -> int:
        return len(self.route)

    @property
    def base(self) -> str:
        return self.settings.base_city

    def mark_visited(self, name: str) -> None:
        self.visited.add(name)

    def record_spend(self, amount: float) -> None:
        self.spent = round(self.spent + amount, 2)

"""Models package - re-exports for convenience."""

from backend.app.models.catalog import (
    Activity,
    Catalog,
    CatalogError,
    CatalogItem,
    City,
    Flight,
    Hotel,
    Restaurant,
    TransportOption,
)
from backend.app.models.common import (
    ActivityCategory,
    BudgetTier,
    CityCategory,
    Currency,
    DayWindow,
    Geo,
    ItemType,
    MealTime,
)
from backend.app.models.itinerary import DayPlan, ItineraryItem, TripPlan
from backend.app.models.request import PlanRequest
from backend.app.models.violations import Violation, ViolationKind, ViolationSeverity

__all__ = [
    # Common
    "Geo",
    "BudgetTier",
    "CityCategory",
    "ActivityCategory",
    "DayWindow",
    "MealTime",
    "ItemType",
    "Currency",
    # Catalog
    "Catalog",
    "CatalogError",
    "CatalogItem",
    "City",
    "Activity",
    "Restaurant",
    "Hotel",
    "TransportOption",
    "Flight",
    # Request
    "PlanRequest",
    # Itinerary
    "ItineraryItem",
    "DayPlan",
    "TripPlan",
    # Violations
    "Violation",
    "ViolationKind",
    "ViolationSeverity",
]

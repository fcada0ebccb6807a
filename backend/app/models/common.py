"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Geo(BaseModel):
    """Geographic coordinates (WGS84)."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class BudgetTier(str, Enum):
    """Price band used to filter catalog entries."""

    budget = "Budget"
    mid = "Mid-Range"
    luxury = "Luxury"


class CityCategory(str, Enum):
    """City category."""

    coastal = "coastal"
    capital = "capital"
    mountain = "mountain"
    resort = "resort"
    other = "other"


class ActivityCategory(str, Enum):
    """Activity category."""

    beach = "Beach"
    mountain = "Mountain"
    culture = "Culture"
    nightlife = "Nightlife"
    exploration = "Exploration"


class DayWindow(str, Enum):
    """Part of the day an activity is best enjoyed in."""

    morning = "Morning"
    afternoon = "Afternoon"
    evening = "Evening"


class MealTime(str, Enum):
    """Meal a restaurant is suited for."""

    breakfast = "Breakfast"
    lunch = "Lunch"
    dinner = "Dinner"


class ItemType(str, Enum):
    """Itinerary item type tag."""

    activity = "Activity"
    meal = "Meal"
    transportation = "Transportation"
    travel = "Travel"
    airport = "Airport"
    hotel = "Hotel"
    return_trip = "Return"


class Currency(str, Enum):
    """Currencies accepted on plan requests."""

    usd = "USD"
    eur = "EUR"
    xof = "XOF"

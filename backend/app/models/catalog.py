"""Catalog models - static reference data the planner reads."""

import math
from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import (
    ActivityCategory,
    BudgetTier,
    CityCategory,
    DayWindow,
    Geo,
    MealTime,
)


class CatalogError(Exception):
    """Catalog data is malformed or a required lookup missed."""

    pass


class City(BaseModel):
    """City the trip can visit."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    geo: Geo
    category: CityCategory
    has_airport: bool = False
    nightlife: bool = False


class CatalogItem(BaseModel):
    """Fields shared by activities, restaurants and hotels."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    city: str
    tier: BudgetTier
    cost: float = Field(..., ge=0)
    geo: Geo


class Activity(CatalogItem):
    """Sight, excursion or night out."""

    category: ActivityCategory
    window: DayWindow
    duration_hours: float = Field(..., gt=0)


class Restaurant(CatalogItem):
    """Place to eat."""

    cuisine: str
    meal: MealTime


class Hotel(CatalogItem):
    """Lodging option; cost is the nightly rate."""

    description: str = ""


class TransportOption(BaseModel):
    """Way of getting around, within a city or between cities."""

    model_config = ConfigDict(frozen=True)

    label: str
    cost_model: Literal["flat", "per_distance", "per_day"]
    rate: float = Field(..., ge=0)
    tier: BudgetTier
    scope: Literal["intra", "inter"]
    cities: tuple[str, ...] | None = None
    priority: int = 100
    min_total_budget: float | None = None
    is_fallback: bool = False

    def matches(self, permitted_label: str) -> bool:
        """Whether a traveler-facing mode label selects this option."""
        return permitted_label == self.label or permitted_label.startswith(self.label)

    def available_in(self, city: str) -> bool:
        return self.cities is None or city in self.cities

    def quote(self, hours: float, max_daily_hours: float = 10.0) -> float:
        """Price one trip of the given travel-time distance."""
        if self.cost_model == "flat":
            return self.rate
        if self.cost_model == "per_distance":
            return self.rate * hours
        days = max(1, math.ceil(hours / max_daily_hours))
        return self.rate * days


class Flight(BaseModel):
    """Scheduled domestic flight between two cities."""

    model_config = ConfigDict(frozen=True)

    origin: str
    destination: str
    price: float = Field(..., ge=0)
    carrier: str
    duration_hours: float = Field(1.0, gt=0)

    def connects(self, a: str, b: str) -> bool:
        return {self.origin, self.destination} == {a, b}


@dataclass(frozen=True)
class Catalog:
    """Read-only bundle of all reference data for one planning call.

    Travel times are keyed by ordered city pair; lookups try both orders.
    """

    cities: tuple[City, ...]
    activities: tuple[Activity, ...]
    restaurants: tuple[Restaurant, ...]
    hotels: tuple[Hotel, ...]
    transport_options: tuple[TransportOption, ...]
    flights: tuple[Flight, ...]
    travel_times: dict[tuple[str, str], float] = field(default_factory=dict)

    def city(self, city_id: str) -> City:
        for city in self.cities:
            if city.id == city_id:
                return city
        raise CatalogError(f"Unknown city: {city_id}")

    def has_city(self, city_id: str) -> bool:
        return any(city.id == city_id for city in self.cities)

    def travel_hours(self, origin: str, destination: str, default: float = 2.0) -> float:
        """Tabulated travel time in hours, falling back to ``default``."""
        if origin == destination:
            return 0.0
        hours = self.travel_times.get((origin, destination))
        if hours is None:
            hours = self.travel_times.get((destination, origin))
        return default if hours is None else hours

    def activities_in(self, city_id: str) -> list[Activity]:
        return [a for a in self.activities if a.city == city_id]

    def restaurants_in(self, city_id: str) -> list[Restaurant]:
        return [r for r in self.restaurants if r.city == city_id]

    def hotels_in(self, city_id: str) -> list[Hotel]:
        """Hotels in a city, cheapest first."""
        return sorted((h for h in self.hotels if h.city == city_id), key=lambda h: (h.cost, h.id))

    def flight_between(self, a: str, b: str) -> Flight | None:
        for flight in self.flights:
            if flight.connects(a, b):
                return flight
        return None

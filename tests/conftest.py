"""Shared pytest fixtures for all test suites."""

import pytest

from backend.app.adapters.fixtures import load_catalog
from backend.app.config import Settings
from backend.app.models import (
    Activity,
    ActivityCategory,
    BudgetTier,
    Catalog,
    City,
    CityCategory,
    DayWindow,
    Flight,
    Geo,
    Hotel,
    MealTime,
    Restaurant,
    TransportOption,
)


@pytest.fixture
def settings() -> Settings:
    """Default settings with the bundled fixtures and Abidjan as base."""
    return Settings(base_city="abidjan", fixtures_dir=None)


@pytest.fixture
def catalog() -> Catalog:
    """The bundled fixture catalog."""
    return load_catalog()


@pytest.fixture
def small_catalog() -> Catalog:
    """Hand-sized catalog with known prices and distances.

    Layout: Abidjan (base) with Grand-Bassam 1h away, Assinie 1.5h away and
    Man 7h away (reachable by a flight).
    """
    cities = (
        City(
            id="abidjan",
            name="Abidjan",
            geo=Geo(lat=5.36, lon=-4.01),
            category=CityCategory.capital,
            has_airport=True,
            nightlife=True,
        ),
        City(
            id="grand-bassam",
            name="Grand-Bassam",
            geo=Geo(lat=5.21, lon=-3.74),
            category=CityCategory.coastal,
            nightlife=True,
        ),
        City(id="assinie", name="Assinie", geo=Geo(lat=5.13, lon=-3.28), category=CityCategory.resort),
        City(
            id="man",
            name="Man",
            geo=Geo(lat=7.41, lon=-7.55),
            category=CityCategory.mountain,
            has_airport=True,
        ),
    )

    def activity(
        id: str,
        name: str,
        city: str,
        category: ActivityCategory,
        window: DayWindow,
        cost: float,
        hours: float,
        geo: tuple[float, float],
        tier: BudgetTier = BudgetTier.budget,
    ) -> Activity:
        return Activity(
            id=id,
            name=name,
            city=city,
            tier=tier,
            cost=cost,
            geo=Geo(lat=geo[0], lon=geo[1]),
            category=category,
            window=window,
            duration_hours=hours,
        )

    activities = (
        activity("abj-walk", "Plateau Walk", "abidjan", ActivityCategory.culture, DayWindow.morning, 10, 2, (5.32, -4.02)),
        activity("abj-banco", "Banco Park", "abidjan", ActivityCategory.exploration, DayWindow.afternoon, 15, 3, (5.39, -4.05)),
        activity("abj-museum", "City Museum", "abidjan", ActivityCategory.culture, DayWindow.afternoon, 12, 2, (5.33, -4.02)),
        activity("abj-cruise", "Lagoon Cruise", "abidjan", ActivityCategory.exploration, DayWindow.afternoon, 45, 2, (5.31, -4.01), BudgetTier.mid),
        activity("abj-night", "Zone 4 Night", "abidjan", ActivityCategory.nightlife, DayWindow.evening, 20, 2, (5.29, -3.99)),
        activity("abj-gallery", "Gallery Tour", "abidjan", ActivityCategory.culture, DayWindow.morning, 150, 3, (5.34, -3.99), BudgetTier.luxury),
        activity("gb-town", "Old Town", "grand-bassam", ActivityCategory.culture, DayWindow.morning, 10, 3, (5.2, -3.737)),
        activity("gb-surf", "Surf Lesson", "grand-bassam", ActivityCategory.beach, DayWindow.morning, 60, 2, (5.193, -3.725)),
        activity("gb-beach", "Beach Time", "grand-bassam", ActivityCategory.beach, DayWindow.afternoon, 5, 2, (5.195, -3.73)),
        activity("as-kayak", "Lagoon Kayak", "assinie", ActivityCategory.exploration, DayWindow.afternoon, 20, 2, (5.14, -3.275)),
        activity("as-beach", "Mafia Beach", "assinie", ActivityCategory.beach, DayWindow.morning, 25, 3, (5.13, -3.28)),
        activity("man-cascade", "Cascade", "man", ActivityCategory.mountain, DayWindow.afternoon, 5, 2, (7.39, -7.57)),
    )

    restaurants = (
        Restaurant(id="abj-maquis", name="Maquis", city="abidjan", tier=BudgetTier.budget, cost=8, geo=Geo(lat=5.345, lon=-3.99), cuisine="Ivorian", meal=MealTime.lunch),
        Restaurant(id="abj-bistro", name="Bistro", city="abidjan", tier=BudgetTier.budget, cost=12, geo=Geo(lat=5.3, lon=-3.985), cuisine="French", meal=MealTime.dinner),
        Restaurant(id="gb-plage", name="Plage", city="grand-bassam", tier=BudgetTier.budget, cost=8, geo=Geo(lat=5.196, lon=-3.731), cuisine="Seafood", meal=MealTime.lunch),
        Restaurant(id="as-grill", name="Grill", city="assinie", tier=BudgetTier.budget, cost=10, geo=Geo(lat=5.138, lon=-3.276), cuisine="Grill", meal=MealTime.lunch),
    )

    hotels = (
        Hotel(id="abj-ibis", name="Ibis", city="abidjan", tier=BudgetTier.budget, cost=50, geo=Geo(lat=5.321, lon=-4.017)),
        Hotel(id="abj-azalai", name="Azalai", city="abidjan", tier=BudgetTier.mid, cost=110, geo=Geo(lat=5.302, lon=-3.982)),
        Hotel(id="abj-ivoire", name="Ivoire", city="abidjan", tier=BudgetTier.luxury, cost=260, geo=Geo(lat=5.333, lon=-3.999)),
        Hotel(id="gb-paillote", name="Paillote", city="grand-bassam", tier=BudgetTier.budget, cost=35, geo=Geo(lat=5.197, lon=-3.734)),
        Hotel(id="gb-etoile", name="Etoile", city="grand-bassam", tier=BudgetTier.mid, cost=90, geo=Geo(lat=5.197, lon=-3.733)),
        Hotel(id="as-beach-hotel", name="Beach Hotel", city="assinie", tier=BudgetTier.mid, cost=100, geo=Geo(lat=5.13, lon=-3.277)),
        Hotel(id="as-lodge", name="Lodge", city="assinie", tier=BudgetTier.luxury, cost=280, geo=Geo(lat=5.121, lon=-3.261)),
        Hotel(id="man-cascades", name="Cascades", city="man", tier=BudgetTier.budget, cost=30, geo=Geo(lat=7.396, lon=-7.566)),
    )

    transport = (
        TransportOption(label="Private Car with Driver", cost_model="per_distance", rate=25, tier=BudgetTier.luxury, scope="inter", priority=10),
        TransportOption(label="Rental Car", cost_model="per_distance", rate=15, tier=BudgetTier.mid, scope="inter", priority=20, min_total_budget=1000),
        TransportOption(label="Inter-city Coach", cost_model="per_distance", rate=8, tier=BudgetTier.budget, scope="inter", priority=30),
        TransportOption(label="Public Transport", cost_model="per_distance", rate=5, tier=BudgetTier.budget, scope="inter", priority=90, is_fallback=True),
        TransportOption(label="Private Car with Driver", cost_model="flat", rate=10, tier=BudgetTier.luxury, scope="intra", priority=10),
        TransportOption(label="Taxi", cost_model="flat", rate=7, tier=BudgetTier.budget, scope="intra", priority=30),
        TransportOption(label="Public Transport", cost_model="flat", rate=5, tier=BudgetTier.budget, scope="intra", priority=90, is_fallback=True),
    )

    flights = (
        Flight(origin="abidjan", destination="man", price=120, carrier="Air Côte d'Ivoire", duration_hours=1.0),
    )

    travel_times = {
        ("abidjan", "grand-bassam"): 1.0,
        ("abidjan", "assinie"): 1.5,
        ("grand-bassam", "assinie"): 1.0,
        ("abidjan", "man"): 7.0,
        ("assinie", "man"): 8.0,
    }

    return Catalog(
        cities=cities,
        activities=activities,
        restaurants=restaurants,
        hotels=hotels,
        transport_options=transport,
        flights=flights,
        travel_times=travel_times,
    )

"""Fixture-based adapters for the travel catalog and FX rates."""

import json
import logging
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from backend.app.config import get_settings
from backend.app.models.catalog import (
    Activity,
    Catalog,
    CatalogError,
    City,
    Flight,
    Hotel,
    Restaurant,
    TransportOption,
)
from backend.app.models.common import Currency

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

CATALOG_FILES = (
    "cities.json",
    "activities.json",
    "restaurants.json",
    "hotels.json",
    "transport.json",
    "flights.json",
    "travel_times.json",
)


def _read_json(fixtures_dir: Path, name: str) -> Any:
    fixtures_path = fixtures_dir / name
    try:
        with open(fixtures_path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Missing fixture file: {fixtures_path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Malformed fixture file {fixtures_path}: {e}") from e


def load_catalog(fixtures_dir: str | Path | None = None) -> Catalog:
    """Load the full catalog from JSON fixtures.

    Args:
        fixtures_dir: Directory holding the fixture files. Defaults to the
            bundled fixtures.

    Returns:
        Immutable Catalog

    Raises:
        CatalogError: A file is missing, unparsable or fails validation, or
            a record references a city that does not exist.
    """
    root = Path(fixtures_dir) if fixtures_dir else FIXTURES_DIR
    raw = {name: _read_json(root, name) for name in CATALOG_FILES}

    try:
        cities = tuple(City(**c) for c in raw["cities.json"])
        activities = tuple(Activity(**a) for a in raw["activities.json"])
        restaurants = tuple(Restaurant(**r) for r in raw["restaurants.json"])
        hotels = tuple(Hotel(**h) for h in raw["hotels.json"])
        transport = tuple(TransportOption(**t) for t in raw["transport.json"])
        flights = tuple(Flight(**f) for f in raw["flights.json"])
        travel_times = {
            (row["from"], row["to"]): float(row["hours"]) for row in raw["travel_times.json"]
        }
    except (ValidationError, KeyError, TypeError) as e:
        raise CatalogError(f"Invalid catalog fixtures in {root}: {e}") from e

    known = {c.id for c in cities}
    referenced = (
        {item.city for item in (*activities, *restaurants, *hotels)}
        | {city for pair in travel_times for city in pair}
        | {f.origin for f in flights}
        | {f.destination for f in flights}
    )
    unknown = sorted(referenced - known)
    if unknown:
        raise CatalogError(f"Catalog references unknown cities: {', '.join(unknown)}")

    logger.info(
        f"[catalog] Loaded {len(cities)} cities, {len(activities)} activities, "
        f"{len(restaurants)} restaurants, {len(hotels)} hotels from {root}"
    )

    return Catalog(
        cities=cities,
        activities=activities,
        restaurants=restaurants,
        hotels=hotels,
        transport_options=transport,
        flights=flights,
        travel_times=travel_times,
    )


@lru_cache
def get_default_catalog() -> Catalog:
    """Get the cached catalog for the configured fixtures directory."""
    return load_catalog(get_settings().fixtures_dir)


def fetch_fx_rate(currency: Currency | str, fixtures_dir: str | Path | None = None) -> tuple[float, date]:
    """Fetch the rate of one catalog unit (USD) in the given currency.

    Args:
        currency: Currency code (e.g., "EUR")
        fixtures_dir: Optional fixtures directory override

    Returns:
        (rate, as_of) tuple

    Raises:
        CatalogError: The currency has no rate in the fixtures.
    """
    code = currency.value if isinstance(currency, Currency) else currency
    root = Path(fixtures_dir) if fixtures_dir else FIXTURES_DIR
    data = _read_json(root, "fx_rates.json")

    rate_data = data.get(code)
    if not rate_data:
        raise CatalogError(f"No FX rate for currency: {code}")

    return float(rate_data["rate"]), date.fromisoformat(rate_data["as_of"])


def to_catalog_units(
    amount: float, currency: Currency | str, fixtures_dir: str | Path | None = None
) -> float:
    """Convert an amount in ``currency`` into catalog units."""
    code = currency.value if isinstance(currency, Currency) else currency
    if code == Currency.usd.value:
        return amount
    rate, _ = fetch_fx_rate(code, fixtures_dir or get_settings().fixtures_dir)
    return round(amount / rate, 2)

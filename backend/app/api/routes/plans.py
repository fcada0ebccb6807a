"""Trip plan endpoints - POST /plans and catalog lookups."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from backend.app.adapters.fixtures import get_default_catalog
from backend.app.config import Settings, get_settings
from backend.app.models.catalog import Catalog, CatalogError
from backend.app.models.common import CityCategory
from backend.app.models.itinerary import TripPlan
from backend.app.models.request import PlanRequest
from backend.app.orchestration.planner import plan_trip

router = APIRouter(tags=["plans"])
logger = logging.getLogger(__name__)


class CityResponse(BaseModel):
    """Response item for GET /catalog/cities."""

    id: str
    name: str
    category: CityCategory
    has_airport: bool
    nightlife: bool


def get_catalog() -> Catalog:
    """Catalog dependency; 503 when the fixtures cannot be loaded."""
    try:
        return get_default_catalog()
    except CatalogError as e:
        logger.error(f"[api] Catalog unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog unavailable",
        ) from e


@router.post("/plans", response_model=TripPlan)
def create_plan(
    request: PlanRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> TripPlan:
    """Plan a trip.

    Catalog failures degrade to a fallback plan (``is_fallback``) rather
    than an error response.
    """
    try:
        return plan_trip(request, settings=settings)
    except Exception as e:
        logger.exception(f"[api] Unexpected planning failure: {type(e).__name__}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to plan trip",
        ) from e


@router.get("/catalog/cities", response_model=list[CityResponse])
def list_cities(catalog: Annotated[Catalog, Depends(get_catalog)]) -> list[CityResponse]:
    """List the cities trips can visit."""
    return [
        CityResponse(
            id=city.id,
            name=city.name,
            category=city.category,
            has_airport=city.has_airport,
            nightlife=city.nightlife,
        )
        for city in catalog.cities
    ]

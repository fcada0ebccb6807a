"""Health check endpoints.

- /health: liveness, always 200
- /healthz: readiness, checks the catalog fixtures load
"""

import json
from typing import Any

from fastapi import APIRouter, Response

from backend.app.adapters.fixtures import get_default_catalog
from backend.app.config import get_settings
from backend.app.models.catalog import CatalogError

router = APIRouter()


def check_catalog() -> tuple[bool, str]:
    """Check that the catalog loads and has a hotel in the base city.

    Returns:
        (is_ok, status_message)
    """
    try:
        catalog = get_default_catalog()
    except CatalogError as e:
        return (False, f"error: {e}")

    base = get_settings().base_city
    if not catalog.hotels_in(base):
        return (False, f"error: no hotel in base city {base}")

    return (True, f"ok: {len(catalog.cities)} cities")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Readiness check.

    Returns:
        200 with component status if the catalog is usable
        503 if it fails to load
    """
    catalog_ok, catalog_status = check_catalog()

    response_body = {
        "status": "ok" if catalog_ok else "degraded",
        "components": {"catalog": catalog_status},
    }

    if not catalog_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body

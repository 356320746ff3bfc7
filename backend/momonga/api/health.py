"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from momonga.catalog.store import get_catalog
from momonga.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    catalog = get_catalog()
    if catalog is None:
        return HealthResponse(status="degraded")
    return HealthResponse(
        status="ok",
        catalog_loaded=True,
        beans=len(catalog.beans),
        types=len(catalog.types),
        questions=len(catalog.questions),
    )

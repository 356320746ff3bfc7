"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException

from momonga.catalog.store import CatalogStore, get_catalog
from momonga.config import Settings, settings
from momonga.engine.errors import DATA_UNAVAILABLE_MESSAGE, SessionNotFound
from momonga.engine.flows import CoffeeFlow, SessionRegistry


def get_settings() -> Settings:
    return settings


def require_catalog() -> CatalogStore:
    """Every flow endpoint stays inert until the catalog has loaded."""
    catalog = get_catalog()
    if catalog is None or catalog.is_empty:
        raise HTTPException(status_code=503, detail=DATA_UNAVAILABLE_MESSAGE)
    return catalog


@lru_cache(maxsize=1)
def get_sessions() -> SessionRegistry:
    return SessionRegistry(limit=settings.session_limit)


def get_flow(
    session_id: str,
    sessions: SessionRegistry = Depends(get_sessions),
    catalog: CatalogStore = Depends(require_catalog),
) -> CoffeeFlow:
    try:
        return sessions.get(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

"""GET /api/catalog/* — read-only catalog browsing."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from momonga.api.views import bean_card
from momonga.catalog.store import CatalogStore
from momonga.dependencies import require_catalog
from momonga.models.responses import BeanCard, CatalogTypeView

router = APIRouter(prefix="/catalog")


@router.get("/types", response_model=list[CatalogTypeView])
async def list_types(catalog: CatalogStore = Depends(require_catalog)) -> list[CatalogTypeView]:
    return [
        CatalogTypeView(
            id=t.id,
            name=t.name,
            emoji=t.emoji or "",
            recommended_bean_ids=list(t.recommended_bean_ids),
        )
        for t in catalog.types
    ]


@router.get("/beans", response_model=list[BeanCard])
async def list_beans(catalog: CatalogStore = Depends(require_catalog)) -> list[BeanCard]:
    return [bean_card(b) for b in catalog.beans]


@router.get("/beans/{bean_id}", response_model=BeanCard)
async def get_bean(bean_id: str, catalog: CatalogStore = Depends(require_catalog)) -> BeanCard:
    bean = catalog.get_bean_by_id(bean_id)
    if bean is None:
        raise HTTPException(status_code=404, detail=f"unknown bean: {bean_id}")
    return bean_card(bean)

"""GET /api/charts/{bean_id}.svg|.png — flavor radar chart for one bean."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from momonga.catalog.store import CatalogStore
from momonga.chart.canvas import ChartCanvas
from momonga.chart.options import ChartOptions
from momonga.chart.renderer import render
from momonga.config import Settings
from momonga.dependencies import get_settings, require_catalog

router = APIRouter(prefix="/charts")


def _draw(
    bean_id: str,
    catalog: CatalogStore,
    settings: Settings,
    size: float | None,
    dpr: float | None,
) -> ChartCanvas:
    bean = catalog.get_bean_by_id(bean_id)
    if bean is None:
        raise HTTPException(status_code=404, detail=f"unknown bean: {bean_id}")
    options = ChartOptions(size=settings.chart_size, pixel_ratio=settings.chart_pixel_ratio)
    options = options.with_overrides(size=size, pixel_ratio=dpr)
    canvas = ChartCanvas(title=f"{bean.name}のレーダーチャート")
    render(bean.scores, canvas, options)
    return canvas


@router.get("/{bean_id}.svg")
async def chart_svg(
    bean_id: str,
    size: float | None = Query(None, gt=0, le=2000),
    catalog: CatalogStore = Depends(require_catalog),
    settings: Settings = Depends(get_settings),
) -> Response:
    canvas = _draw(bean_id, catalog, settings, size, None)
    return Response(content=canvas.to_svg(), media_type="image/svg+xml")


@router.get("/{bean_id}.png")
async def chart_png(
    bean_id: str,
    size: float | None = Query(None, gt=0, le=2000),
    dpr: float | None = Query(None, gt=0, le=4),
    catalog: CatalogStore = Depends(require_catalog),
    settings: Settings = Depends(get_settings),
) -> Response:
    canvas = _draw(bean_id, catalog, settings, size, dpr)
    return Response(content=canvas.to_png(), media_type="image/png")

"""/api/sessions — one visitor's diagnosis / omakase / gacha / blend flows.

Every endpoint answers with the visitor's current view. Engine errors are
mapped to HTTP statuses by the handlers registered in main.py.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from momonga.api.views import build_view
from momonga.catalog.store import CatalogStore
from momonga.chart.options import ChartOptions
from momonga.config import Settings
from momonga.dependencies import get_flow, get_sessions, get_settings, require_catalog
from momonga.engine.flows import CoffeeFlow, SessionRegistry
from momonga.engine.presenter import RecordingPresenter
from momonga.models.requests import AnswerRequest
from momonga.models.responses import ViewResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions")


def _view(session_id: str, flow: CoffeeFlow, settings: Settings) -> ViewResponse:
    return build_view(session_id, flow.presenter.view, advance_after_ms=settings.answer_cooldown_ms)


@router.post("", response_model=ViewResponse, status_code=201)
async def create_session(
    catalog: CatalogStore = Depends(require_catalog),
    sessions: SessionRegistry = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    presenter = RecordingPresenter(
        ChartOptions(size=settings.chart_size, pixel_ratio=settings.chart_pixel_ratio)
    )
    flow = CoffeeFlow(catalog, presenter, gacha_spin_seconds=settings.gacha_spin_ms / 1000)
    session_id = sessions.add(flow)
    flow.go_top()
    logger.debug("Created session %s (%d active)", session_id, len(sessions))
    return _view(session_id, flow, settings)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    sessions: SessionRegistry = Depends(get_sessions),
) -> Response:
    sessions.discard(session_id)
    return Response(status_code=204)


@router.post("/{session_id}/top", response_model=ViewResponse)
async def go_top(
    session_id: str,
    flow: CoffeeFlow = Depends(get_flow),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    flow.go_top()
    return _view(session_id, flow, settings)


@router.post("/{session_id}/diagnosis", response_model=ViewResponse)
async def start_diagnosis(
    session_id: str,
    flow: CoffeeFlow = Depends(get_flow),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    flow.start_diagnosis()
    return _view(session_id, flow, settings)


@router.post("/{session_id}/diagnosis/answer", response_model=ViewResponse)
async def answer(
    session_id: str,
    req: AnswerRequest,
    flow: CoffeeFlow = Depends(get_flow),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    flow.answer(req.choice_index, question_index=req.question_index)
    return _view(session_id, flow, settings)


@router.post("/{session_id}/omakase", response_model=ViewResponse)
async def omakase(
    session_id: str,
    flow: CoffeeFlow = Depends(get_flow),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    flow.omakase()
    return _view(session_id, flow, settings)


@router.post("/{session_id}/gacha", response_model=ViewResponse)
async def open_gacha(
    session_id: str,
    flow: CoffeeFlow = Depends(get_flow),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    flow.open_gacha()
    return _view(session_id, flow, settings)


@router.post("/{session_id}/gacha/pull", response_model=ViewResponse)
async def pull_gacha(
    session_id: str,
    flow: CoffeeFlow = Depends(get_flow),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    await flow.pull_gacha()
    return _view(session_id, flow, settings)


@router.get("/{session_id}/blend", response_model=ViewResponse)
async def current_blend(
    session_id: str,
    flow: CoffeeFlow = Depends(get_flow),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    flow.show_blend()
    return _view(session_id, flow, settings)


@router.get("/{session_id}/blend/{bean_id}", response_model=ViewResponse)
async def blend(
    session_id: str,
    bean_id: str,
    flow: CoffeeFlow = Depends(get_flow),
    settings: Settings = Depends(get_settings),
) -> ViewResponse:
    flow.show_blend(bean_id)
    return _view(session_id, flow, settings)

"""FastAPI app factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from momonga.catalog.store import aload_catalog, set_catalog
from momonga.config import settings
from momonga.dependencies import get_sessions
from momonga.engine.errors import (
    DATA_UNAVAILABLE_MESSAGE,
    BeanNotFound,
    DataUnavailable,
    GachaBusy,
    InvalidChoice,
    QuizStateError,
    SessionNotFound,
)

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.momonga_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)

# Engine error -> HTTP status
_ERROR_STATUS: dict[type[Exception], int] = {
    SessionNotFound: 404,
    BeanNotFound: 404,
    QuizStateError: 409,
    GachaBusy: 409,
    InvalidChoice: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the catalog once; flows stay inert (503) if it fails."""
    try:
        set_catalog(await aload_catalog(settings.catalog_dir))
    except DataUnavailable as e:
        logger.error("Data load error: %s", e)
        set_catalog(None)
    yield
    get_sessions().clear()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Momonga Coffee",
        description="Coffee type diagnosis, bean gacha and flavor radar charts",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    from momonga.api.router import api_router

    app.include_router(api_router)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    async def data_unavailable(request: Request, exc: DataUnavailable) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": DATA_UNAVAILABLE_MESSAGE})

    app.add_exception_handler(DataUnavailable, data_unavailable)

    for exc_type, status in _ERROR_STATUS.items():
        async def handler(request: Request, exc: Exception, _status: int = status) -> JSONResponse:
            return JSONResponse(status_code=_status, content={"detail": str(exc)})

        app.add_exception_handler(exc_type, handler)


app = create_app()

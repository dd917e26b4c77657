# main.py — backend entrypoint
from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from vibename_backend.app.config import Settings, load_settings
from vibename_backend.app.db.seed import seed_from_file
from vibename_backend.app.db.session import init_db, make_engine
from vibename_backend.app.errors import (
    Internal, InvalidInput, RateLimited, RecommendationError, Unavailable,
)
from vibename_backend.app.routers import recommend as recommend_router
from vibename_backend.app.routers import result as result_router
from vibename_backend.app.schemas import ErrorOut
from vibename_backend.app.services.admission.gate import AdmissionGate
from vibename_backend.app.services.data_stores.names import NameStore
from vibename_backend.app.services.data_stores.rate_events import SqlRateEventStore
from vibename_backend.app.services.recommender.matcher import Recommender
from vibename_backend.app.services.vision.detector import FaceDetector
from vibename_backend.app.services.vision.google_vision import GoogleVisionDetector

logger = logging.getLogger("uvicorn.error")

_GENERIC_INTERNAL = "Something went wrong on our side. Please try again."
_API_PREFIX = "/api"
_LEGACY_PATHS = {_API_PREFIX + recommend_router.LEGACY_PATH}


# --- Error rendering ---------------------------------------------------------
def _error_response(request: Request, exc: RecommendationError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    detail = exc.detail
    if isinstance(exc, Internal):
        # full detail stays in the log; the client gets the generic message
        logger.error("request %s failed: %s", request_id, exc.context,
                     exc_info=exc.__cause__ or exc)
        detail = _GENERIC_INTERNAL
    elif isinstance(exc, Unavailable):
        logger.warning("request %s unavailable: %s", request_id, exc.context)

    body = ErrorOut(reason=exc.reason, detail=detail, request_id=request_id)
    if request.url.path in _LEGACY_PATHS:
        body.message = detail
    headers = {}
    if isinstance(exc, RateLimited):
        headers["Retry-After"] = str(int(request.app.state.settings.rate_limit_window_s))
    return JSONResponse(status_code=exc.status_code,
                        content=body.model_dump(mode="json", exclude_none=True),
                        headers=headers)

async def _on_recommendation_error(request: Request, exc: RecommendationError) -> JSONResponse:
    return _error_response(request, exc)

async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed bodies are InvalidInput (400), not the framework's 422
    first = next(iter(exc.errors()), {})
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid request")
    return _error_response(request, InvalidInput(f"{where}: {msg}" if where else msg))

async def _on_unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    # anything that escaped the taxonomy is still reported as Internal
    internal = Internal(cause=f"{type(exc).__name__}: {exc}")
    internal.__cause__ = exc
    return _error_response(request, internal)


# --- App factory -------------------------------------------------------------
def create_app(
    settings: Optional[Settings] = None,
    *,
    detector: Optional[FaceDetector] = None,
    rng: Optional[random.Random] = None,
    clock: Callable[[], float] = time.time,
) -> FastAPI:
    """
    Build the API with explicitly constructed collaborators. Tests pass
    their own settings/detector/rng/clock; production uses the defaults.
    """
    settings = settings or load_settings()
    engine = make_engine(settings)
    init_db(engine)
    if settings.seed_on_startup and settings.seed_file is not None:
        if settings.seed_file.exists():
            seed_from_file(engine, settings.seed_file)
        else:
            logger.warning("seed file %s not found; starting with existing data", settings.seed_file)

    names = NameStore(engine)
    gate = AdmissionGate(
        SqlRateEventStore(engine),
        limit=settings.rate_limit_max,
        window_s=settings.rate_limit_window_s,
        strict=settings.rate_limit_strict,
        clock=clock,
    )
    recommender = Recommender(
        settings=settings,
        gate=gate,
        detector=detector or GoogleVisionDetector(settings.google_credentials_json),
        names=names,
        rng=rng,
    )

    app = FastAPI(title="Name Vibe API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.names = names
    app.state.recommender = recommender

    # --- CORS for the web client ---------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RecommendationError, _on_recommendation_error)
    app.add_exception_handler(RequestValidationError, _on_validation_error)
    app.add_exception_handler(Exception, _on_unhandled_error)

    # --- Routers under /api --------------------------------------------------
    app.include_router(recommend_router.router, prefix=_API_PREFIX)
    app.include_router(result_router.router, prefix=_API_PREFIX)

    # --- Health --------------------------------------------------------------
    @app.get("/health")
    async def health():
        return {"ok": True}

    @app.get("/api/health")
    async def api_health():
        # mirror the non-prefixed /health so the FE's /api/health succeeds
        return {"ok": True}

    for r in app.router.routes:
        if isinstance(r, APIRoute):
            logger.debug("mounted %-10s %s", ",".join(sorted(r.methods)), r.path)

    return app


app = create_app()


def serve() -> None:
    import uvicorn
    uvicorn.run("vibename_backend.app.main:app", host="0.0.0.0", port=8000)

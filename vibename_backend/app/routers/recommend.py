# vibename_backend/app/routers/recommend.py
from __future__ import annotations
from typing import Any, Dict
from fastapi import APIRouter, Request

from vibename_backend.app.errors import RecommendationError
from vibename_backend.app.observability.recommendation_trace import RecommendationTrace
from vibename_backend.app.schemas import (
    LegacyRecommendationOut, RecommendRequest, RecommendationOut,
)
from vibename_backend.app.services.recommender.matcher import Recommender
from vibename_backend.app.services.recommender.result import RecommendationResult
from vibename_backend.app.utils.client_ip import caller_identity

router = APIRouter(tags=["recommend"])

# error bodies on this path also carry `message` (see main._error_response)
LEGACY_PATH = "/analyze"


def _run(request: Request, body: RecommendRequest) -> RecommendationResult:
    recommender: Recommender = request.app.state.recommender
    caller = caller_identity(request)
    trace = RecommendationTrace(caller=caller)
    request.state.request_id = trace.request_id
    try:
        result = recommender.recommend(body, caller, trace)
    except RecommendationError as e:
        trace.finish(e.reason.value)
        raise
    except Exception:
        trace.finish("Internal")
        raise
    trace.finish("ok")
    return result

@router.post("/recommend", response_model=RecommendationOut)
def recommend(request: Request, body: RecommendRequest) -> Dict[str, Any]:
    """
    Body: {image, genderPreference: "M"|"F"|"U", ageMarker, debugOverride?}
    200 -> {success, name, companions[]}; failures are rendered by the
    RecommendationError handler in main.py.
    """
    return _run(request, body).to_payload()

@router.post(LEGACY_PATH, response_model=LegacyRecommendationOut)
def analyze(request: Request, body: RecommendRequest) -> Dict[str, Any]:
    """
    Path used by the original web client ({image, gender, age}).
    200 adds `celebrity` (first namesake or null); errors add `message`.
    """
    return _run(request, body).to_legacy_payload()

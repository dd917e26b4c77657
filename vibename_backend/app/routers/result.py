# vibename_backend/app/routers/result.py
from __future__ import annotations
from typing import Any, Dict
from fastapi import APIRouter, Request

from vibename_backend.app.errors import NotFound
from vibename_backend.app.schemas import RecommendationOut
from vibename_backend.app.services.recommender.resolution import resolve_shared

router = APIRouter(prefix="/result", tags=["result"])

@router.get("/{name_id}", response_model=RecommendationOut)
def shared_result(name_id: str, request: Request) -> Dict[str, Any]:
    # share links carry the numeric id; anything else simply isn't a result
    if not name_id.isdigit():
        raise NotFound("Sorry, name not found.")
    return resolve_shared(request.app.state.names, int(name_id)).to_payload()

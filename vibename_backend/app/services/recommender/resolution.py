# vibename_backend/app/services/recommender/resolution.py
from __future__ import annotations

from vibename_backend.app.errors import NotFound
from vibename_backend.app.services.data_stores.names import NameStore

from .companions import guarded, resolve_companions
from .result import RecommendationResult


def resolve_shared(names: NameStore, record_id: int) -> RecommendationResult:
    """
    Rebuild a shared result from the name's stable id alone. Uses the same
    companion resolution as the recommend path, so the two always agree.
    """
    record = guarded(names.get_by_id, record_id)
    if record is None:
        raise NotFound("Sorry, name not found.", record_id=record_id)
    return RecommendationResult(name=record, companions=resolve_companions(names, record))

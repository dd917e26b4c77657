# vibename_backend/app/services/recommender/__init__.py
from __future__ import annotations

from .matcher import Recommender
from .resolution import resolve_shared
from .result import RecommendationResult

__all__ = ["Recommender", "resolve_shared", "RecommendationResult"]

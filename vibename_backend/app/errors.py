# vibename_backend/app/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional

from vibename_backend.app.schemas import RejectReason


class RecommendationError(Exception):
    """
    Base for every rejection the recommendation core can produce.
    `detail` is user-facing; anything internal belongs in the log, not here.
    """
    reason: RejectReason = RejectReason.INTERNAL
    status_code: int = 500

    def __init__(self, detail: Optional[str] = None, **context: Any) -> None:
        super().__init__(detail or self.reason.value)
        self.detail = detail
        self.context: Dict[str, Any] = context


class InvalidInput(RecommendationError):
    reason = RejectReason.INVALID_INPUT
    status_code = 400

class RateLimited(RecommendationError):
    reason = RejectReason.RATE_LIMITED
    status_code = 429

class NoMatch(RecommendationError):
    reason = RejectReason.NO_MATCH
    status_code = 404

class NotFound(RecommendationError):
    reason = RejectReason.NOT_FOUND
    status_code = 404

class Internal(RecommendationError):
    reason = RejectReason.INTERNAL
    status_code = 500

class Unavailable(RecommendationError):
    # transient: classifier/store deadline exceeded; the client may retry
    reason = RejectReason.UNAVAILABLE
    status_code = 503


__all__ = [
    "RecommendationError", "InvalidInput", "RateLimited",
    "NoMatch", "NotFound", "Internal", "Unavailable",
]

# vibename_backend/app/observability/recommendation_trace.py
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from vibename_backend.app.utils.req_id import new_request_id

log = logging.getLogger("vibename.trace")
if not log.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    log.addHandler(handler)
    log.setLevel(logging.INFO)
    log.propagate = False


class RecommendationTrace:
    """
    Structured record of how one request was handled: admission, vibe,
    candidate pool, pick, companions, outcome. Server-side only; the client
    sees nothing but the request id.
    """
    def __init__(self, request_id: Optional[str] = None, caller: Optional[str] = None) -> None:
        self._t0 = time.time()
        self.request_id = request_id or new_request_id("rec")
        self.caller = caller
        self.meta: Dict[str, Any] = {}
        self.steps: List[Dict[str, Any]] = []
        self.outcome: Optional[str] = None

    def set_meta(self, **kwargs: Any) -> None:
        self.meta.update(kwargs)

    def add_step(self, label: str, **detail: Any) -> None:
        self.steps.append({"t": round(time.time() - self._t0, 4), "label": label, **detail})

    def finish(self, outcome: str) -> None:
        self.outcome = outcome
        log.info("request=%s caller=%s outcome=%s elapsed_ms=%d steps=%s meta=%s",
                 self.request_id, self.caller, outcome,
                 int((time.time() - self._t0) * 1000), self.steps, self.meta)

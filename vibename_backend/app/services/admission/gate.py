# vibename_backend/app/services/admission/gate.py
from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

log = logging.getLogger("vibename.admission")


class RateEventStore(Protocol):
    def count_since(self, caller: str, since: float) -> int: ...
    def record(self, caller: str, at: float) -> None: ...
    def record_if_below(self, caller: str, since: float, at: float, limit: int) -> bool: ...


class AdmissionGate:
    """
    Sliding-window throttle: at most `limit` admitted calls per caller in the
    trailing `window_s` seconds. Every admitted call appends one event;
    rejected calls append nothing.

    strict=True  -> one conditional insert (count and write in one statement).
    strict=False -> count, then insert. Two concurrent calls at limit-1 can
                    both pass, so the window may admit a few extra calls.
    """

    def __init__(
        self,
        store: RateEventStore,
        *,
        limit: int = 5,
        window_s: float = 60.0,
        strict: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self.limit = limit
        self.window_s = window_s
        self.strict = strict
        self._clock = clock

    def admit(self, caller: str) -> bool:
        now = self._clock()
        since = now - self.window_s
        try:
            if self.strict:
                admitted = self._store.record_if_below(caller, since, now, self.limit)
            else:
                admitted = self._store.count_since(caller, since) < self.limit
                if admitted:
                    self._store.record(caller, now)
        except Exception:
            # fail closed: an unreadable log must not grant admission
            log.exception("admission store failed for caller=%s; rejecting", caller)
            return False

        if not admitted:
            log.info("rate limited caller=%s (limit=%d/%ss)", caller, self.limit, self.window_s)
        return admitted

# vibename_backend/app/services/data_stores/rate_events.py
from __future__ import annotations

from sqlalchemy import func, insert, literal, select
from sqlalchemy.engine import Engine

from vibename_backend.app.db.models import RateEvent


class SqlRateEventStore:
    """
    Append-only rate event log. Retention/cleanup is handled outside the app.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _recent_count(self, caller: str, since: float):
        return (
            select(func.count())
            .select_from(RateEvent)
            .where(RateEvent.caller == caller, RateEvent.ts >= since)
        )

    def count_since(self, caller: str, since: float) -> int:
        with self._engine.connect() as conn:
            return int(conn.execute(self._recent_count(caller, since)).scalar_one())

    def record(self, caller: str, at: float) -> None:
        with self._engine.begin() as conn:
            conn.execute(insert(RateEvent).values(caller=caller, ts=at))

    def record_if_below(self, caller: str, since: float, at: float, limit: int) -> bool:
        """
        Conditional insert: INSERT ... SELECT ... WHERE count < limit.
        Count and write happen in one statement. On SQLite writers are
        serialised, so two callers racing for the last slot cannot both be
        admitted. Under READ COMMITTED (Postgres default) two concurrent
        statements can still both see limit - 1 rows; the overshoot is then
        bounded by the number of racing requests.
        """
        recent = self._recent_count(caller, since).scalar_subquery()
        stmt = insert(RateEvent).from_select(
            ["caller", "ts"],
            select(literal(caller), literal(at)).where(recent < limit),
        )
        with self._engine.begin() as conn:
            return conn.execute(stmt).rowcount == 1

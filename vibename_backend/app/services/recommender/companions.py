# vibename_backend/app/services/recommender/companions.py
from __future__ import annotations

from typing import Callable, List, TypeVar

from sqlalchemy.exc import SQLAlchemyError, TimeoutError as PoolTimeout

from vibename_backend.app.db.models import CompanionRecord, NameRecord
from vibename_backend.app.errors import Internal, Unavailable
from vibename_backend.app.services.data_stores.names import NameStore
from vibename_backend.app.services.naming.identity import base_identity

T = TypeVar("T")


def guarded(fn: Callable[..., T], *args) -> T:
    """Run a store query, mapping driver errors onto the public taxonomy."""
    try:
        return fn(*args)
    except PoolTimeout as e:
        raise Unavailable("The service is busy. Please try again.", cause=str(e)) from e
    except SQLAlchemyError as e:
        raise Internal(cause=f"store query failed: {e}") from e


def resolve_companions(names: NameStore, record: NameRecord) -> List[CompanionRecord]:
    """All namesakes sharing the record's base identity (possibly none)."""
    return guarded(names.companions_for, base_identity(record.name_id))

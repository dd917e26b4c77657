# vibename_backend/app/db/session.py

# [DB Session] Engine + helpers
from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from vibename_backend.app.config import Settings


def make_engine(settings: Settings) -> Engine:
    """
    SQLite needs check_same_thread=False for typical FastAPI usage; its busy
    timeout doubles as the store-query bound.
    """
    url = settings.db_url
    if url.startswith("sqlite"):
        # Ensure the parent dir exists for sqlite file URLs
        raw_path = url.split("///", 1)[1] if "///" in url else ""
        if raw_path and raw_path != ":memory:":
            Path(raw_path).parent.mkdir(parents=True, exist_ok=True)
        connect_args = {"check_same_thread": False, "timeout": settings.store_timeout_s}
        return create_engine(url, echo=False, connect_args=connect_args)
    return create_engine(url, echo=False, pool_timeout=settings.store_timeout_s, pool_pre_ping=True)

def init_db(engine: Engine) -> None:
    # Ensure table definitions are registered before create_all
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(engine)
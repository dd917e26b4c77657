# vibename_backend/app/services/data_stores/__init__.py
"""
Export surface for store adapters.

    from vibename_backend.app.services.data_stores import NameStore, SqlRateEventStore
"""

from __future__ import annotations

# ---- Reference data (names + namesakes) ----
from .names import NameStore  # noqa: F401

# ---- Admission log ----
from .rate_events import SqlRateEventStore  # noqa: F401

__all__ = ["NameStore", "SqlRateEventStore"]

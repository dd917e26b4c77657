# vibename_backend/app/config/__init__.py
from __future__ import annotations

# Re-export config surface expected by callers across the app.

from .manifest import Settings, load_settings
from .paths import (
    REPO_ROOT,
    APP_ROOT,
    data_dir,
    default_seed_file,
)

__all__ = [
    # manifest
    "Settings",
    "load_settings",
    # paths
    "REPO_ROOT",
    "APP_ROOT",
    "data_dir",
    "default_seed_file",
]

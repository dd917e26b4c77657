# vibename_backend/app/config/paths.py
from __future__ import annotations

"""
Central path resolution for the name-vibe backend.

Env overrides:
    DATA_DIR
    VIBENAME_SEED_FILE

Defaults:
    <repo_root>/data
    <repo_root>/vibename_backend/app/dataset/names.yaml
"""

import os
from pathlib import Path

# ──────────────────────────────────────────────────────────────────────────────
_THIS_FILE = Path(__file__).resolve()

def _resolve_repo_root() -> Path:
    p = _THIS_FILE
    for _ in range(6):
        if (p.parent / "vibename_backend" / "app").exists():
            return p.parent
        p = p.parent
    return _THIS_FILE.parents[3]

REPO_ROOT: Path = _resolve_repo_root()
APP_ROOT: Path = _THIS_FILE.parents[1]

def _clean_env(value: str | None) -> str | None:
    if value is None:
        return None
    v = value.strip().strip('"').strip("'")
    return v or None

def _env_path(name: str) -> Path | None:
    raw = _clean_env(os.getenv(name))
    if not raw:
        return None
    return Path(raw).expanduser().resolve()

def data_dir() -> Path:
    """DATA_DIR is re-read on every call so tests can point it at tmp dirs."""
    return (_env_path("DATA_DIR") or REPO_ROOT / "data").resolve()

def default_seed_file() -> Path:
    return _env_path("VIBENAME_SEED_FILE") or APP_ROOT / "dataset" / "names.yaml"

__all__ = [
    "REPO_ROOT", "APP_ROOT",
    "data_dir", "default_seed_file",
]

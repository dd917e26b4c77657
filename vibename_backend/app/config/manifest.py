# vibename_backend/app/config/manifest.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .paths import data_dir, default_seed_file

# ---- env readers ----

def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name, "").strip()
    return raw or default

def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip() not in ("0", "false", "False", "no", "off")

def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default

def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


_DEFAULT_CORS: Tuple[str, ...] = ("http://localhost:3000", "http://127.0.0.1:3000")


@dataclass(frozen=True)
class Settings:
    db_url: str
    app_env: str = "development"

    # admission gate
    rate_limit_max: int = 5
    rate_limit_window_s: float = 60.0
    rate_limit_strict: bool = True

    # debug override
    debug_override_enabled: bool = False
    debug_age_marker: str = "999"
    debug_name_identifier: str = "seojun_서준"

    # external call bounds
    vision_timeout_s: float = 10.0
    store_timeout_s: float = 5.0
    max_image_bytes: int = 4 * 1024 * 1024

    # dataset
    seed_on_startup: bool = False
    seed_file: Optional[Path] = None

    cors_origins: Tuple[str, ...] = _DEFAULT_CORS
    google_credentials_json: Optional[str] = None


def load_settings() -> Settings:
    """Build Settings from the process environment."""
    app_env = _env_str("APP_ENV", "development")
    is_dev = app_env == "development"
    default_db = f"sqlite:///{data_dir() / 'vibename.sqlite3'}"

    origins = tuple(
        o.strip() for o in os.getenv("VIBENAME_CORS_ORIGINS", "").split(",") if o.strip()
    ) or _DEFAULT_CORS

    return Settings(
        db_url=_env_str("DATABASE_URL", default_db),
        app_env=app_env,
        rate_limit_max=_env_int("VIBENAME_RATE_LIMIT_MAX", 5),
        rate_limit_window_s=_env_float("VIBENAME_RATE_LIMIT_WINDOW_S", 60.0),
        rate_limit_strict=_env_bool("VIBENAME_RATE_LIMIT_STRICT", True),
        debug_override_enabled=_env_bool("VIBENAME_DEBUG_OVERRIDE", is_dev),
        debug_age_marker=_env_str("VIBENAME_DEBUG_AGE_MARKER", "999"),
        debug_name_identifier=_env_str("VIBENAME_DEBUG_NAME_ID", "seojun_서준"),
        vision_timeout_s=_env_float("VIBENAME_VISION_TIMEOUT_S", 10.0),
        store_timeout_s=_env_float("VIBENAME_STORE_TIMEOUT_S", 5.0),
        max_image_bytes=_env_int("VIBENAME_MAX_IMAGE_BYTES", 4 * 1024 * 1024),
        seed_on_startup=_env_bool("VIBENAME_SEED_ON_STARTUP", is_dev),
        seed_file=default_seed_file(),
        cors_origins=origins,
        google_credentials_json=os.getenv("GOOGLE_CREDENTIALS_JSON") or None,
    )


__all__ = ["Settings", "load_settings"]

# vibename_backend/app/db/seed.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from .models import CompanionRecord, NameRecord, VIBE_TAG_DELIMITER

log = logging.getLogger("vibename.seed")


def upsert(session: Session, model, where: dict, values: dict):
    row = session.exec(select(model).filter_by(**where)).first()
    if row:
        for k, v in values.items():
            setattr(row, k, v)
        session.add(row)
        return row
    row = model(**where, **values)
    session.add(row)
    return row

def load_dataset(path: Path) -> Dict[str, List[Dict[str, Any]]]:
    """
    Read the YAML dataset. Shape:
        names:       [{name_id, name_hangul, romaja_rr, gender_primary, is_unisex, vibe_tags, ...}]
        celebrities: [{name_id, celebrity_name_romaja, celebrity_group_or_profession, image_url}]
    """
    doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"dataset {path} must be a mapping, got {type(doc).__name__}")
    return {
        "names": list(doc.get("names") or []),
        "celebrities": list(doc.get("celebrities") or []),
    }

def _name_values(entry: Dict[str, Any]) -> Dict[str, Any]:
    tags = entry.get("vibe_tags") or []
    if isinstance(tags, (list, tuple)):
        tags = VIBE_TAG_DELIMITER.join(str(t).strip().lower() for t in tags)
    return {
        "name_hangul": entry["name_hangul"],
        "romaja_rr": entry["romaja_rr"],
        "meaning_en_desc": entry.get("meaning_en_desc"),
        "gender_primary": str(entry.get("gender_primary") or "U").upper(),
        "is_unisex": bool(entry.get("is_unisex", False)),
        "vibe_tags": tags,
    }

def seed_from_file(engine: Engine, path: Path) -> Dict[str, int]:
    """Idempotent: names keyed by name_id, celebrities by (name_id, romaja)."""
    data = load_dataset(path)
    with Session(engine) as session:
        for entry in data["names"]:
            upsert(session, NameRecord, {"name_id": entry["name_id"]}, _name_values(entry))
        for entry in data["celebrities"]:
            upsert(session, CompanionRecord,
                   {"name_id": entry["name_id"],
                    "celebrity_name_romaja": entry["celebrity_name_romaja"]},
                   {"celebrity_group_or_profession": entry.get("celebrity_group_or_profession"),
                    "image_url": entry.get("image_url")})
        session.commit()

    counts = {"names": len(data["names"]), "celebrities": len(data["celebrities"])}
    log.info("seeded dataset from %s: %s", path, counts)
    return counts

# models.py  (reference dataset + rate-limit event log)

from __future__ import annotations
from typing import List, Optional, Set
from sqlalchemy import Index
from sqlmodel import SQLModel, Field

# vibe_tags is stored as a delimited membership string, e.g. "friendly,calm"
VIBE_TAG_DELIMITER = ","


# ---------- Names ----------

class NameRecord(SQLModel, table=True):
    __tablename__ = "korean_names"

    id: Optional[int] = Field(default=None, primary_key=True)
    name_id: str = Field(index=True, unique=True)   # "<slug>[_<variant>]"
    name_hangul: str
    romaja_rr: str
    meaning_en_desc: Optional[str] = None
    gender_primary: str = Field(index=True)         # "M" | "F" | "U"
    is_unisex: bool = False                         # may disagree with gender_primary
    vibe_tags: str = ""

    def vibe_set(self) -> Set[str]:
        return {
            t.strip().lower()
            for t in (self.vibe_tags or "").split(VIBE_TAG_DELIMITER)
            if t.strip()
        }

    def vibe_list(self) -> List[str]:
        return sorted(self.vibe_set())


# ---------- Namesakes ----------

class CompanionRecord(SQLModel, table=True):
    __tablename__ = "celebrities"

    id: Optional[int] = Field(default=None, primary_key=True)
    name_id: str = Field(index=True)                # base identity of a NameRecord
    celebrity_name_romaja: str
    celebrity_group_or_profession: Optional[str] = None
    image_url: Optional[str] = None


# ---------- Admission log ----------

class RateEvent(SQLModel, table=True):
    __tablename__ = "rate_events"
    __table_args__ = (Index("ix_rate_events_caller_ts", "caller", "ts"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    caller: str
    ts: float                                       # epoch seconds

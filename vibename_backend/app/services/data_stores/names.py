# vibename_backend/app/services/data_stores/names.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from vibename_backend.app.db.models import CompanionRecord, NameRecord
from vibename_backend.app.schemas import GenderPreference, VibeCategory


class NameStore:
    """
    Read-only queries over korean_names / celebrities.
    Rows are returned detached; nothing here writes.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, record_id: int) -> Optional[NameRecord]:
        with Session(self._engine) as session:
            return session.get(NameRecord, record_id)

    def get_by_identifier(self, name_id: str) -> Optional[NameRecord]:
        with Session(self._engine) as session:
            return session.exec(select(NameRecord).where(NameRecord.name_id == name_id)).first()

    def candidates(self, vibe: VibeCategory, gender: GenderPreference) -> List[NameRecord]:
        """
        Names tagged with `vibe` that satisfy the gender rule:
          M / F -> gender_primary equals the preference
          U     -> is_unisex flag set (gender_primary is ignored)
        """
        stmt = select(NameRecord).where(NameRecord.vibe_tags.contains(vibe.value))
        if gender is GenderPreference.UNISEX:
            stmt = stmt.where(NameRecord.is_unisex == True)  # noqa: E712
        else:
            stmt = stmt.where(NameRecord.gender_primary == gender.value)
        stmt = stmt.order_by(NameRecord.id)

        with Session(self._engine) as session:
            rows = session.exec(stmt).all()
        # LIKE is only a prefilter; membership is decided on the parsed tag set
        return [r for r in rows if vibe.value in r.vibe_set()]

    def companions_for(self, base_name_id: str) -> List[CompanionRecord]:
        with Session(self._engine) as session:
            stmt = (
                select(CompanionRecord)
                .where(CompanionRecord.name_id == base_name_id)
                .order_by(CompanionRecord.id)
            )
            return list(session.exec(stmt).all())

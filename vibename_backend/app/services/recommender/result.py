# vibename_backend/app/services/recommender/result.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vibename_backend.app.db.models import CompanionRecord, NameRecord
from vibename_backend.app.schemas import (
    CompanionOut, LegacyRecommendationOut, NameOut, RecommendationOut, VibeCategory,
)


@dataclass
class RecommendationResult:
    name: NameRecord
    companions: List[CompanionRecord] = field(default_factory=list)
    vibe: Optional[VibeCategory] = None   # None for shared lookups and debug override

    def to_out(self) -> RecommendationOut:
        n = self.name
        return RecommendationOut(
            name=NameOut(
                id=n.id,
                name_id=n.name_id,
                name_hangul=n.name_hangul,
                romaja_rr=n.romaja_rr,
                meaning_en_desc=n.meaning_en_desc,
                gender_primary=n.gender_primary,
                is_unisex=n.is_unisex,
                vibe_tags=n.vibe_list(),
            ),
            companions=[
                CompanionOut(
                    id=c.id,
                    name_id=c.name_id,
                    celebrity_name_romaja=c.celebrity_name_romaja,
                    celebrity_group_or_profession=c.celebrity_group_or_profession,
                    image_url=c.image_url,
                )
                for c in self.companions
            ],
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.to_out().model_dump()

    def to_legacy_payload(self) -> Dict[str, Any]:
        out = self.to_out()
        return LegacyRecommendationOut(
            name=out.name,
            companions=out.companions,
            celebrity=out.companions[0] if out.companions else None,
        ).model_dump()

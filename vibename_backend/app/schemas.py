# schemas.py  (wire models + shared enums for the recommendation API)

from __future__ import annotations
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


# ===================== Enums =====================

class GenderPreference(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNISEX = "U"

class VibeCategory(str, Enum):
    FRIENDLY = "friendly"
    CALM = "calm"
    COOL = "cool"

class Likelihood(IntEnum):
    # five-level ordinal, same order as the vision provider's enum
    VERY_UNLIKELY = 1
    UNLIKELY = 2
    POSSIBLE = 3
    LIKELY = 4
    VERY_LIKELY = 5

class Emotion(str, Enum):
    JOY = "joy"
    SORROW = "sorrow"
    ANGER = "anger"
    SURPRISE = "surprise"

class RejectReason(str, Enum):
    INVALID_INPUT = "InvalidInput"
    RATE_LIMITED = "RateLimited"
    NO_MATCH = "NoMatch"
    NOT_FOUND = "NotFound"
    INTERNAL = "Internal"
    UNAVAILABLE = "Unavailable"


# mapping emotion -> likelihood for one detected face
EmotionLikelihoods = Dict[Emotion, Likelihood]


# ===================== Requests =====================

class RecommendRequest(BaseModel):
    """
    Body of POST /recommend. Every field is optional at the schema level;
    presence rules are enforced by the matcher so they report InvalidInput
    instead of a framework validation error.
    Accepts the legacy client keys (gender/age) as aliases.
    """
    image: Optional[str] = None                       # base64 or data: URL
    gender_preference: Optional[str] = Field(
        default=None, validation_alias="genderPreference"
    )
    age_marker: Optional[Union[str, int]] = Field(default=None, validation_alias="ageMarker")
    debug_override: bool = Field(default=False, validation_alias="debugOverride")

    # legacy client keys
    gender: Optional[str] = None
    age: Optional[Union[str, int]] = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def resolved_gender(self) -> Optional[str]:
        return self.gender_preference or self.gender

    def resolved_age_marker(self) -> Optional[str]:
        value = self.age_marker if self.age_marker is not None else self.age
        return None if value is None else str(value).strip()


# ===================== Responses =====================

class NameOut(BaseModel):
    id: int
    name_id: str
    name_hangul: str
    romaja_rr: str
    meaning_en_desc: Optional[str] = None
    gender_primary: str
    is_unisex: bool
    vibe_tags: List[str] = []

class CompanionOut(BaseModel):
    id: int
    name_id: str
    celebrity_name_romaja: str
    celebrity_group_or_profession: Optional[str] = None
    image_url: Optional[str] = None

class RecommendationOut(BaseModel):
    success: bool = True
    name: NameOut
    companions: List[CompanionOut] = []

class LegacyRecommendationOut(RecommendationOut):
    # the original web client renders a single namesake
    celebrity: Optional[CompanionOut] = None

class ErrorOut(BaseModel):
    success: bool = False
    reason: RejectReason
    detail: Optional[str] = None
    request_id: Optional[str] = None
    message: Optional[str] = None                     # legacy client copy of detail

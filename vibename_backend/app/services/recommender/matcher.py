# vibename_backend/app/services/recommender/matcher.py
from __future__ import annotations

import logging
import random
from typing import Optional

from vibename_backend.app.config import Settings
from vibename_backend.app.errors import (
    Internal, InvalidInput, NoMatch, NotFound, RateLimited, RecommendationError,
)
from vibename_backend.app.observability.recommendation_trace import RecommendationTrace
from vibename_backend.app.schemas import GenderPreference, RecommendRequest
from vibename_backend.app.services.admission.gate import AdmissionGate
from vibename_backend.app.services.data_stores.names import NameStore
from vibename_backend.app.services.vibe.classifier import classify
from vibename_backend.app.services.vision.detector import FaceDetector
from vibename_backend.app.utils.image_payload import decode_image

from .companions import guarded, resolve_companions
from .result import RecommendationResult

log = logging.getLogger("vibename.recommender")


class Recommender:
    """
    Photo -> vibe -> name -> namesakes.

    Steps run strictly in order and each failure stops the rest:
      1. validate (never billed)
      2. admission (one rate event when admitted)
      3. debug override, or detect faces -> classify -> candidates -> pick
      4. companions by base identity
    """

    def __init__(
        self,
        *,
        settings: Settings,
        gate: AdmissionGate,
        detector: FaceDetector,
        names: NameStore,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.gate = gate
        self.detector = detector
        self.names = names
        self._rng = rng or random.Random()

    # ---- step 1 ----
    def _parse_gender(self, raw: Optional[str]) -> GenderPreference:
        if not raw:
            raise InvalidInput("Image, gender, and age are required.")
        try:
            return GenderPreference(raw.strip().upper())
        except ValueError:
            raise InvalidInput(f"Unknown gender preference {raw!r}; use M, F or U.") from None

    def override_requested(self, request: RecommendRequest) -> bool:
        if not self.settings.debug_override_enabled:
            return False
        return request.debug_override or request.resolved_age_marker() == self.settings.debug_age_marker

    # ---- entry point ----
    def recommend(
        self,
        request: RecommendRequest,
        caller: str,
        trace: Optional[RecommendationTrace] = None,
    ) -> RecommendationResult:
        trace = trace or RecommendationTrace(caller=caller)

        gender = self._parse_gender(request.resolved_gender())
        override = self.override_requested(request)
        image: Optional[bytes] = None
        if not override:
            if not request.image:
                raise InvalidInput("Image, gender, and age are required.")
            image = decode_image(request.image, self.settings.max_image_bytes)
        trace.set_meta(gender=gender.value, override=override)

        if not self.gate.admit(caller):
            trace.add_step("admission", admitted=False)
            raise RateLimited("Too many requests. Please wait a minute and try again.")
        trace.add_step("admission", admitted=True)

        if override:
            result = self._debug_result(trace)
        else:
            result = self._matched_result(image, gender, trace)

        result.companions = resolve_companions(self.names, result.name)
        trace.add_step("companions", count=len(result.companions))
        return result

    # ---- step 3a ----
    def _debug_result(self, trace: RecommendationTrace) -> RecommendationResult:
        name_id = self.settings.debug_name_identifier
        log.info("DEBUG MODE: forcing '%s' result", name_id)
        record = guarded(self.names.get_by_identifier, name_id)
        if record is None:
            raise NotFound(f"Debug name '{name_id}' is not in the dataset.")
        trace.add_step("debug_override", name_id=name_id, selected_id=record.id)
        return RecommendationResult(name=record)

    # ---- step 3b ----
    def _matched_result(
        self, image: bytes, gender: GenderPreference, trace: RecommendationTrace
    ) -> RecommendationResult:
        try:
            faces = self.detector.detect_faces(image, self.settings.vision_timeout_s)
        except RecommendationError:
            raise
        except Exception as e:
            raise Internal(cause=f"face detector failed: {e}") from e

        if len(faces) != 1:
            trace.add_step("faces", count=len(faces))
            raise InvalidInput(f"Expected 1 face, but found {len(faces)}.", face_count=len(faces))

        vibe = classify(faces[0])
        candidates = guarded(self.names.candidates, vibe, gender)
        trace.add_step("candidates", vibe=vibe.value, count=len(candidates))
        if not candidates:
            raise NoMatch("Sorry, we couldn't find a matching name for your vibe.")

        picked = self._rng.choice(candidates)
        trace.add_step("selected", id=picked.id, name_id=picked.name_id)
        return RecommendationResult(name=picked, vibe=vibe)

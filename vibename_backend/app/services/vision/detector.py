# vibename_backend/app/services/vision/detector.py
from __future__ import annotations

from typing import List, Protocol

from vibename_backend.app.schemas import EmotionLikelihoods


class FaceDetector(Protocol):
    """
    Anything that turns image bytes into one likelihood map per detected face.
    Raise errors.Unavailable on deadline, errors.Internal on anything else.
    """
    def detect_faces(self, image: bytes, timeout: float) -> List[EmotionLikelihoods]: ...

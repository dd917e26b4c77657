# vibename_backend/app/services/vibe/classifier.py
from __future__ import annotations

from typing import Mapping, Tuple

from vibename_backend.app.schemas import Emotion, Likelihood, VibeCategory

# First match wins: joy > sorrow > anger. Not configurable.
_PRIORITY: Tuple[Tuple[Emotion, VibeCategory], ...] = (
    (Emotion.JOY, VibeCategory.FRIENDLY),
    (Emotion.SORROW, VibeCategory.CALM),
    (Emotion.ANGER, VibeCategory.COOL),
)

DEFAULT_VIBE = VibeCategory.FRIENDLY
_THRESHOLD = Likelihood.LIKELY


def classify(signals: Mapping[Emotion, Likelihood]) -> VibeCategory:
    """Map one face's emotion likelihoods to a vibe category."""
    for emotion, vibe in _PRIORITY:
        if signals.get(emotion, Likelihood.VERY_UNLIKELY) >= _THRESHOLD:
            return vibe
    return DEFAULT_VIBE

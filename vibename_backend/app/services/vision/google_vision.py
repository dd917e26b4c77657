# vibename_backend/app/services/vision/google_vision.py
from __future__ import annotations

import json
import logging
from threading import Lock
from typing import Any, List, Optional

from google.api_core import exceptions as gexc
from google.cloud import vision
from google.oauth2 import service_account

from vibename_backend.app.errors import Internal, Unavailable
from vibename_backend.app.schemas import Emotion, EmotionLikelihoods, Likelihood

log = logging.getLogger("vibename.vision")

# provider enum name -> our ordinal; UNKNOWN counts as "no signal"
_LIKELIHOOD_BY_NAME = {
    "UNKNOWN": Likelihood.VERY_UNLIKELY,
    "VERY_UNLIKELY": Likelihood.VERY_UNLIKELY,
    "UNLIKELY": Likelihood.UNLIKELY,
    "POSSIBLE": Likelihood.POSSIBLE,
    "LIKELY": Likelihood.LIKELY,
    "VERY_LIKELY": Likelihood.VERY_LIKELY,
}

_FACE_FIELDS = {
    Emotion.JOY: "joy_likelihood",
    Emotion.SORROW: "sorrow_likelihood",
    Emotion.ANGER: "anger_likelihood",
    Emotion.SURPRISE: "surprise_likelihood",
}


def to_likelihood(value: Any) -> Likelihood:
    name = getattr(value, "name", None) or str(value)
    return _LIKELIHOOD_BY_NAME.get(name.upper(), Likelihood.VERY_UNLIKELY)

def face_to_signals(face: Any) -> EmotionLikelihoods:
    return {emotion: to_likelihood(getattr(face, attr, None)) for emotion, attr in _FACE_FIELDS.items()}

def _credentials_from_json(raw: Optional[str]):
    if not raw:
        return None
    try:
        return service_account.Credentials.from_service_account_info(json.loads(raw))
    except (ValueError, KeyError) as e:
        # fall back to application-default credentials
        log.error("Failed to parse GOOGLE_CREDENTIALS_JSON: %s", e)
        return None


class GoogleVisionDetector:
    """
    FACE_DETECTION via Cloud Vision. The client is built on first use so the
    app can start (and tests can run) without credentials present.
    """

    def __init__(self, credentials_json: Optional[str] = None, client: Any = None) -> None:
        self._credentials_json = credentials_json
        self._client = client
        self._lock = Lock()

    def _get_client(self):
        with self._lock:
            if self._client is None:
                creds = _credentials_from_json(self._credentials_json)
                self._client = vision.ImageAnnotatorClient(credentials=creds)
            return self._client

    def detect_faces(self, image: bytes, timeout: float) -> List[EmotionLikelihoods]:
        try:
            client = self._get_client()
            # retry=None: a failed call is reported, never re-sent within the request
            response = client.face_detection(
                image=vision.Image(content=image), retry=None, timeout=timeout
            )
        except gexc.DeadlineExceeded as e:
            raise Unavailable("Face analysis timed out. Please try again.", cause=str(e)) from e
        except Exception as e:
            raise Internal(cause=f"vision call failed: {e}") from e

        if response.error.message:
            raise Internal(cause=f"vision error: {response.error.message}")
        return [face_to_signals(f) for f in response.face_annotations]

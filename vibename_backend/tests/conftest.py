from __future__ import annotations
import base64
import os
import random
import tempfile

# keep the module-level app's sqlite file out of the repo
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="vibename-data-"))

import pytest
from fastapi.testclient import TestClient

from vibename_backend.app.config import Settings, default_seed_file
from vibename_backend.app.main import create_app
from vibename_backend.app.schemas import Emotion, Likelihood

L = Likelihood

IMAGE_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-payload"
IMAGE_DATA_URL = "data:image/jpeg;base64," + base64.b64encode(IMAGE_BYTES).decode()


def face(joy=L.VERY_UNLIKELY, sorrow=L.VERY_UNLIKELY, anger=L.VERY_UNLIKELY, surprise=L.VERY_UNLIKELY):
    return {Emotion.JOY: joy, Emotion.SORROW: sorrow, Emotion.ANGER: anger, Emotion.SURPRISE: surprise}


class FakeDetector:
    """Returns a fixed face list (or raises) and counts calls."""
    def __init__(self, faces=None, error=None):
        self.faces = [face(joy=L.VERY_LIKELY)] if faces is None else faces
        self.error = error
        self.calls = 0
        self.last_image = None

    def detect_faces(self, image, timeout):
        self.calls += 1
        self.last_image = image
        if self.error is not None:
            raise self.error
        return list(self.faces)


class FixedClock:
    def __init__(self, t: float = 1_700_000_000.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture
def clock():
    return FixedClock()

@pytest.fixture
def detector():
    return FakeDetector()

@pytest.fixture
def settings(tmp_path):
    return Settings(
        db_url=f"sqlite:///{tmp_path / 'vibename.sqlite3'}",
        debug_override_enabled=True,
        seed_on_startup=True,
        seed_file=default_seed_file(),
    )

@pytest.fixture
def app(settings, detector, clock):
    return create_app(settings, detector=detector, rng=random.Random(7), clock=clock)

@pytest.fixture
def client(app):
    return TestClient(app)

@pytest.fixture
def make_client(detector, clock):
    """Build a client over custom settings (e.g. a different dataset)."""
    def _make(settings: Settings, **kw) -> TestClient:
        kw.setdefault("detector", detector)
        kw.setdefault("clock", clock)
        kw.setdefault("rng", random.Random(7))
        return TestClient(create_app(settings, **kw))
    return _make

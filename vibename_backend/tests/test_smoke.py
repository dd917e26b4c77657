import pytest
from fastapi.testclient import TestClient

@pytest.mark.smoke
def test_module_level_app_boots_and_mounts_routes():
    from vibename_backend.app.main import app
    client = TestClient(app)

    r = client.get("/health")
    assert r.status_code == 200 and r.json().get("ok") is True

    paths = {getattr(route, "path", None) for route in app.router.routes}
    assert {"/api/recommend", "/api/analyze", "/api/result/{name_id}"} <= paths

@pytest.mark.smoke
def test_settings_from_env(monkeypatch):
    from vibename_backend.app.config import load_settings
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("VIBENAME_RATE_LIMIT_MAX", "9")
    s = load_settings()
    assert s.rate_limit_max == 9
    # the override and seeding default off outside development
    assert s.debug_override_enabled is False and s.seed_on_startup is False

# tests/test_api_contracts.py
# Purpose: wire shapes and status codes of /api/recommend and /api/result.
import dataclasses

import pytest
from fastapi.testclient import TestClient

from conftest import IMAGE_DATA_URL, FakeDetector, face
from vibename_backend.app.schemas import Likelihood as L


def _post(client: TestClient, body, ip=None, path="/api/recommend"):
    headers = {"X-Forwarded-For": ip} if ip else {}
    return client.post(path, json=body, headers=headers)


@pytest.mark.smoke
def test_health(client: TestClient):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/api/health").json() == {"ok": True}

def test_success_shape(client: TestClient):
    r = _post(client, {"image": IMAGE_DATA_URL, "genderPreference": "F", "ageMarker": "24"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    for k in ("id", "name_id", "name_hangul", "romaja_rr", "meaning_en_desc"):
        assert k in body["name"]
    assert isinstance(body["companions"], list)

def test_debug_override_end_to_end_is_deterministic(client: TestClient):
    bodies = [_post(client, {"genderPreference": "F", "ageMarker": "999"}).json() for _ in range(3)]
    for b in bodies:
        assert b["success"] is True
        assert b["name"]["name_id"] == "seojun_서준"
        assert [c["celebrity_name_romaja"] for c in b["companions"]] == ["Park Seo-jun"]
    assert bodies[0] == bodies[1] == bodies[2]

def test_legacy_analyze_path_and_keys(client: TestClient):
    r = _post(client, {"image": IMAGE_DATA_URL, "gender": "M", "age": "31"}, path="/api/analyze")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert "name_id" in body["name"]
    # single-namesake view for the original client: first companion or null
    if body["companions"]:
        assert body["celebrity"] == body["companions"][0]
    else:
        assert body["celebrity"] is None

def test_legacy_analyze_celebrity_is_first_companion(client: TestClient):
    r = _post(client, {"gender": "F", "age": "999"}, path="/api/analyze")
    body = r.json()
    assert body["name"]["name_id"] == "seojun_서준"
    assert body["celebrity"]["celebrity_name_romaja"] == "Park Seo-jun"
    assert body["companions"] == [body["celebrity"]]

def test_legacy_analyze_errors_carry_message(settings, make_client):
    client = make_client(settings, detector=FakeDetector(faces=[face(), face()]))
    r = _post(client, {"image": IMAGE_DATA_URL, "gender": "F", "age": "20"}, path="/api/analyze")
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False and body["reason"] == "InvalidInput"
    assert body["message"] == body["detail"] == "Expected 1 face, but found 2."

    missing = _post(client, {"age": "20"}, path="/api/analyze").json()
    assert missing["message"] == "Image, gender, and age are required."

def test_recommend_path_has_no_legacy_fields(client: TestClient):
    ok = _post(client, {"genderPreference": "F", "ageMarker": "999"}).json()
    assert "celebrity" not in ok
    err = _post(client, {"ageMarker": "20"}).json()
    assert "message" not in err

def test_missing_fields_are_400_invalid_input(client: TestClient):
    r = _post(client, {"ageMarker": "20"})
    assert r.status_code == 400
    assert r.json()["success"] is False and r.json()["reason"] == "InvalidInput"

def test_malformed_body_is_400_not_422(client: TestClient):
    r = client.post("/api/recommend", content=b"not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["reason"] == "InvalidInput"

def test_face_count_is_reported(settings, make_client):
    client = make_client(settings, detector=FakeDetector(faces=[face(), face(), face()]))
    r = _post(client, {"image": IMAGE_DATA_URL, "genderPreference": "F"})
    assert r.status_code == 400
    assert r.json()["reason"] == "InvalidInput"
    assert "found 3" in r.json()["detail"]

def test_no_match_is_404(tmp_path, settings, make_client):
    dataset = tmp_path / "tiny.yaml"
    dataset.write_text(
        "names:\n"
        "  - {name_id: solo_솔, name_hangul: 솔, romaja_rr: Sol, gender_primary: M, vibe_tags: [calm]}\n",
        encoding="utf-8",
    )
    client = make_client(dataclasses.replace(settings, seed_file=dataset))
    r = _post(client, {"image": IMAGE_DATA_URL, "genderPreference": "F"})
    assert r.status_code == 404
    assert r.json() == {"success": False, "reason": "NoMatch",
                        "detail": "Sorry, we couldn't find a matching name for your vibe.",
                        "request_id": r.json()["request_id"]}

def test_six_rapid_requests_sixth_is_rate_limited(settings, make_client, clock):
    # first five succeed or fail on their own merits (here: zero faces)
    detector = FakeDetector(faces=[])
    client = make_client(settings, detector=detector)
    codes = []
    for _ in range(6):
        codes.append(_post(client, {"image": IMAGE_DATA_URL, "genderPreference": "F"}, ip="198.51.100.7").status_code)
        clock.advance(1.5)
    assert codes == [400] * 5 + [429]

    r = _post(client, {"image": IMAGE_DATA_URL, "genderPreference": "F"}, ip="198.51.100.7")
    assert r.json()["reason"] == "RateLimited"
    assert r.headers["Retry-After"] == "60"
    assert detector.calls == 5

def test_forwarded_for_first_hop_is_the_caller(client: TestClient):
    for _ in range(5):
        _post(client, {"genderPreference": "F", "ageMarker": "999"}, ip="192.0.2.1, 10.0.0.1")
    assert _post(client, {"genderPreference": "F", "ageMarker": "999"}, ip="192.0.2.1").status_code == 429
    # a different first hop behind the same proxy is a different caller
    assert _post(client, {"genderPreference": "F", "ageMarker": "999"}, ip="192.0.2.2, 10.0.0.1").status_code == 200

def test_invalid_input_does_not_consume_quota(client: TestClient):
    for _ in range(10):
        assert _post(client, {"ageMarker": "20"}, ip="192.0.2.50").status_code == 400
    assert _post(client, {"genderPreference": "F", "ageMarker": "999"}, ip="192.0.2.50").status_code == 200

def test_internal_errors_do_not_leak(settings, make_client):
    client = make_client(settings, detector=FakeDetector(error=RuntimeError("secret-provider-token xyz")))
    r = _post(client, {"image": IMAGE_DATA_URL, "genderPreference": "F"})
    assert r.status_code == 500
    body = r.json()
    assert body["reason"] == "Internal"
    assert "secret" not in r.text
    assert body["request_id"]

def test_timeout_is_503_unavailable(settings, make_client):
    from vibename_backend.app.errors import Unavailable
    client = make_client(settings, detector=FakeDetector(error=Unavailable("Face analysis timed out. Please try again.")))
    r = _post(client, {"image": IMAGE_DATA_URL, "genderPreference": "F"})
    assert r.status_code == 503 and r.json()["reason"] == "Unavailable"

def test_unexpected_exceptions_render_as_internal(app, monkeypatch):
    def boom(_base):
        raise RuntimeError("companion table exploded")
    monkeypatch.setattr(app.state.names, "companions_for", boom)
    client = TestClient(app, raise_server_exceptions=False)

    r = client.get("/api/result/1")
    assert r.status_code == 500
    assert r.headers["content-type"].startswith("application/json")
    assert r.json()["success"] is False and r.json()["reason"] == "Internal"
    assert "exploded" not in r.text

    r = _post(client, {"genderPreference": "F", "ageMarker": "999"})
    assert r.status_code == 500 and r.json()["reason"] == "Internal"
    assert r.json()["request_id"]


# ---------- shared result ----------

def test_shared_result_matches_the_recommendation(settings, make_client):
    client = make_client(settings, detector=FakeDetector(faces=[face(joy=L.LIKELY)]))
    for gender in ("F", "M", "U"):
        rec = _post(client, {"image": IMAGE_DATA_URL, "genderPreference": gender}, ip=f"10.1.1.{ord(gender)}").json()
        shared = client.get(f"/api/result/{rec['name']['id']}").json()
        assert shared["name"] == rec["name"]
        key = lambda c: c["id"]
        assert sorted(shared["companions"], key=key) == sorted(rec["companions"], key=key)

def test_shared_result_for_variant_name_includes_base_companions(client: TestClient):
    names = client.app.state.names
    variant = names.get_by_identifier("jisoo_지수_01")
    body = client.get(f"/api/result/{variant.id}").json()
    assert body["success"] is True
    assert sorted(c["celebrity_name_romaja"] for c in body["companions"]) == ["Hong Ji-soo", "Kim Ji-soo"]

def test_shared_result_not_found(client: TestClient):
    for path in ("/api/result/999999", "/api/result/not-a-number"):
        r = client.get(path)
        assert r.status_code == 404
        assert r.json()["reason"] == "NotFound"

def test_shared_result_does_not_consume_quota(client: TestClient):
    for _ in range(10):
        client.get("/api/result/1", headers={"X-Forwarded-For": "192.0.2.77"})
    assert _post(client, {"genderPreference": "F", "ageMarker": "999"}, ip="192.0.2.77").status_code == 200

"""
Tests for the session HTTP routes, run in-process with FastAPI's TestClient.
"""

from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from career_reimagined.application.exceptions import LLMContractError
from career_reimagined.main import app
from career_reimagined.wiring.dependencies import build_session

BASE = "/api/v1/session"


@pytest.fixture
def client(ai):
    with TestClient(app) as c:
        app.state.session = build_session(ai)
        yield c


@pytest.fixture
def photo_b64(png):
    return base64.b64encode(png()).decode("ascii")


def _upload(client, data_base64: str, mime_type: str = "image/png"):
    payload = {
        "data_base64": data_base64,
        "mime_type": mime_type,
        "filename": "pet.png",
    }
    return client.post(f"{BASE}/photo", json=payload)


def _to_gallery(client, photo_b64, careers):
    assert _upload(client, photo_b64).status_code == 200
    for c in careers:
        client.post(f"{BASE}/careers", json={"career": c})
    return client.post(f"{BASE}/generate")


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_initial_snapshot(client):
    body = client.get(BASE).json()
    assert body["step"] == "UPLOAD"
    assert body["has_photo"] is False
    assert body["subject_descriptor"] == "Human"
    assert body["careers"] == []


def test_photo_upload_classifies_subject(client, ai, photo_b64):
    ai.subject = "Siamese Cat"
    body = _upload(client, photo_b64).json()

    assert body["has_photo"] is True
    assert body["subject_descriptor"] == "Siamese Cat"
    assert body["loading_message"] is None


def test_invalid_base64_is_400(client):
    r = client.post(f"{BASE}/photo", json={"data_base64": "***", "mime_type": "image/png"})
    assert r.status_code == 400


def test_rejected_upload_reports_error_in_snapshot(client, ai, photo_b64):
    body = _upload(client, photo_b64, mime_type="image/gif").json()

    assert body["has_photo"] is False
    assert body["upload_error"] == "Please upload a valid image (JPEG, PNG, WEBP)."
    assert ai.classify_calls == 0


def test_career_editing(client):
    client.post(f"{BASE}/careers", json={"career": "  CEO  "})
    client.post(f"{BASE}/careers", json={"career": "Chef"})
    client.post(f"{BASE}/careers", json={"career": "CEO"})
    assert client.get(BASE).json()["careers"] == ["CEO", "Chef"]

    body = client.delete(f"{BASE}/careers", params={"career": "CEO"}).json()
    assert body["careers"] == ["Chef"]

    body = client.post(f"{BASE}/careers/surprise").json()
    assert len(body["careers"]) == 3


def test_generate_without_photo_is_400(client):
    client.post(f"{BASE}/careers", json={"career": "CEO"})
    r = client.post(f"{BASE}/generate")
    assert r.status_code == 400


def test_full_flow_through_export(client, ai, photo_b64):
    body = _to_gallery(client, photo_b64, ["Software Engineer", "Chef"]).json()
    assert body["step"] == "GALLERY"
    assert [i["career"] for i in body["generated_images"]] == ["Software Engineer", "Chef"]
    assert all(i["image_url"].startswith("data:image/png;base64,") for i in body["generated_images"])

    body = client.post(f"{BASE}/plan", json={"career": "Software Engineer"}).json()
    assert body["step"] == "PLAN_VIEW"
    assert body["cached_plans"] == ["Software Engineer"]
    plan = body["selected_plan"]
    assert len(plan["weeks"]) == 8
    assert plan["recommended_courses"][0]["url"] == "https://www.google.com/search?q=Strategy%20101"

    r = client.get(f"{BASE}/export")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert "Software_Engineer_Plan.pdf" in r.headers["content-disposition"]
    assert r.content.startswith(b"%PDF")

    r = client.get(f"{BASE}/images", params={"career": "Chef"})
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert "reimagined-Chef.png" in r.headers["content-disposition"]

    assert client.post(f"{BASE}/back").json()["step"] == "GALLERY"
    client.post(f"{BASE}/plan", json={"career": "Software Engineer"})
    assert len(ai.plan_prompts) == 1


def test_plan_failure_returns_notice_once(client, ai, photo_b64):
    ai.plan_error = LLMContractError("Plan: invalid JSON.")
    _to_gallery(client, photo_b64, ["CEO"])

    body = client.post(f"{BASE}/plan", json={"career": "CEO"}).json()
    assert body["step"] == "GALLERY"
    assert body["notifications"] == ["Failed to generate plan. Please try again."]
    assert client.get(BASE).json()["notifications"] == []


def test_failed_image_cannot_be_downloaded(client, ai, upstream_error, photo_b64):
    ai.image_failures["Pilot"] = upstream_error
    body = _to_gallery(client, photo_b64, ["Pilot"]).json()
    assert body["generated_images"][0]["error"] == "Failed to generate."

    r = client.get(f"{BASE}/images", params={"career": "Pilot"})
    assert r.status_code == 404


def test_export_outside_plan_view_is_400(client):
    assert client.get(f"{BASE}/export").status_code == 400


def test_reset_wipes_session(client, photo_b64):
    _to_gallery(client, photo_b64, ["CEO"])
    body = client.post(f"{BASE}/reset").json()

    assert body["step"] == "UPLOAD"
    assert body["has_photo"] is False
    assert body["careers"] == []
    assert body["generated_images"] == []
    assert body["cached_plans"] == []

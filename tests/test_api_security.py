import asyncio
import base64
import importlib

import pytest
from fastapi.testclient import TestClient

import renumber.settings as settings
from renumber.health import HealthCheckResult

from .conftest import make_pdf

AUTH = {"Authorization": "Bearer super-secret"}


def _make_client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("RENUMBER_API_TOKEN", "super-secret")
    monkeypatch.setenv("RENUMBER_FONT_URL", "")
    monkeypatch.setenv("RENUMBER_READY_CHECK_FONT", "false")
    monkeypatch.setenv("RENUMBER_READY_CHECK_LLM", "false")
    settings.reset_settings_cache()
    import renumber.api as api  # noqa: F401

    api = importlib.reload(api)
    return TestClient(api.app), api


def test_upload_requires_bearer_token(monkeypatch: pytest.MonkeyPatch):
    client, _ = _make_client(monkeypatch)

    resp = client.post(
        "/process/upload",
        data={"new_number": "555-000-1111"},
        files={"file": ("dummy.pdf", b"%PDF-1.0\n", "application/pdf")},
    )
    assert resp.status_code == 401

    resp_ok = client.post(
        "/process/upload",
        headers=AUTH,
        data={"new_number": "555-000-1111"},
        files={"file": ("dummy.pdf", b"%PDF-1.0\n", "application/pdf")},
    )
    assert resp_ok.status_code == 422


def test_upload_returns_data_uri(monkeypatch: pytest.MonkeyPatch):
    client, _ = _make_client(monkeypatch)
    pdf = make_pdf([["Call 555-123-4567 today"]])

    resp = client.post(
        "/process/upload",
        headers=AUTH,
        data={"new_number": "555-000-1111", "mode": "in_place"},
        files={"file": ("my flyer.pdf", pdf, "application/pdf")},
    )
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["file_name"] == "my_flyer.pdf"
    assert payload["replacements"] == 1
    prefix = "data:application/pdf;base64,"
    assert payload["download_url"].startswith(prefix)
    assert base64.b64decode(payload["download_url"][len(prefix):]).startswith(b"%PDF")


def test_process_requires_url_and_number(monkeypatch: pytest.MonkeyPatch):
    client, _ = _make_client(monkeypatch)
    resp = client.post("/process", headers=AUTH, json={"new_number": "555-000-1111"})
    assert resp.status_code == 400


def test_process_fetches_remote_pdf(monkeypatch: pytest.MonkeyPatch):
    client, api = _make_client(monkeypatch)
    pdf = make_pdf([["Title", "Call 555-123-4567 today"]])
    monkeypatch.setattr(api, "fetch_bytes", lambda url, timeout: pdf)

    resp = client.post(
        "/process",
        headers=AUTH,
        json={
            "pdf_url": "https://example.com/files/flyer.pdf",
            "new_number": "555-000-1111",
            "mode": "rebuild",
        },
    )
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["file_name"] == "flyer.pdf"
    assert payload["preview"] == "Rebuilt PDF created."


def test_readyz_reflects_health(monkeypatch: pytest.MonkeyPatch):
    client, api = _make_client(monkeypatch)

    def fake_checks(_settings):
        return [HealthCheckResult(name="font", status="fail", detail="missing", required=True)]

    monkeypatch.setattr(api, "run_readiness_checks", fake_checks)
    resp = client.get("/readyz")
    assert resp.status_code == 503
    payload = resp.json()
    assert payload["ready"] is False
    assert payload["checks"][0]["name"] == "font"


def test_health_is_open(monkeypatch: pytest.MonkeyPatch):
    client, _ = _make_client(monkeypatch)
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/livez").status_code == 200


def test_upload_processing_runs_off_the_event_loop(monkeypatch: pytest.MonkeyPatch):
    client, api = _make_client(monkeypatch)
    real = api.process_document
    seen = []

    def spy(*args, **kwargs):
        try:
            asyncio.get_running_loop()
            seen.append("loop")
        except RuntimeError:
            seen.append("worker")
        return real(*args, **kwargs)

    monkeypatch.setattr(api, "process_document", spy)
    resp = client.post(
        "/process/upload",
        headers=AUTH,
        data={"new_number": "555-000-1111"},
        files={"file": ("flyer.pdf", make_pdf([["Call 555-123-4567"]]), "application/pdf")},
    )
    assert resp.status_code == 200
    assert seen == ["worker"]

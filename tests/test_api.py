"""
Tests for API endpoints.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.llm_engine import LLMEngine, get_llm_engine
from app.main import app
from app.services.translator import (
    RemoteTranslationError,
    Translator,
    get_translator,
)


def completion(content: str) -> dict:
    return {"choices": [{"message": {"content": content}}]}


def engine_with(handler) -> LLMEngine:
    return LLMEngine(
        api_key="test-key",
        base_url="http://llm.test/v1",
        transport=httpx.MockTransport(handler)
    )


class FailingRemote:
    async def fetch_remote_translation(self, text, options):
        raise RemoteTranslationError("AI service down")


class CrashingRemote:
    async def fetch_remote_translation(self, text, options):
        raise RuntimeError("client crashed")


@pytest.fixture
def client():
    """Create test client."""
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_response_structure(self, client):
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert "version" in data
        assert "timestamp" in data

    def test_health_reports_llm_backend(self, client):
        app.dependency_overrides[get_llm_engine] = lambda: LLMEngine(
            api_key="", model="test/model", base_url="http://llm.test/v1"
        )
        data = client.get("/health").json()

        assert data["llm_backend"] == {
            "configured": False,
            "model": "test/model",
            "base_url": "http://llm.test/v1",
        }


class TestTranslateEndpoint:
    """Test the AI translation endpoint."""

    def test_missing_text(self, client):
        response = client.post("/translate", json={"audience": "adult"})
        assert response.status_code == 400
        assert response.json() == {"error": "Missing text"}

    def test_empty_text(self, client):
        response = client.post("/translate", json={"text": ""})
        assert response.status_code == 400

    def test_missing_body(self, client):
        response = client.post("/translate")
        assert response.status_code == 400
        assert response.json() == {"error": "Missing text"}

    def test_success(self, client):
        def handler(request):
            content = json.dumps({"simple": "You have high blood pressure.", "actions": ["Rest"]})
            return httpx.Response(200, json=completion(content))

        app.dependency_overrides[get_llm_engine] = lambda: engine_with(handler)
        response = client.post("/translate", json={"text": "Pt w/ HTN", "tone": "direct"})

        assert response.status_code == 200
        assert response.json() == {"simple": "You have high blood pressure.", "actions": ["Rest"]}

    def test_unparseable_model_output(self, client):
        def handler(request):
            return httpx.Response(200, json=completion("Plain words only."))

        app.dependency_overrides[get_llm_engine] = lambda: engine_with(handler)
        response = client.post("/translate", json={"text": "Pt w/ HTN"})

        assert response.status_code == 200
        assert response.json() == {"simple": "Plain words only.", "actions": []}

    def test_upstream_failure(self, client):
        def handler(request):
            return httpx.Response(429, text="rate limited")

        app.dependency_overrides[get_llm_engine] = lambda: engine_with(handler)
        response = client.post("/translate", json={"text": "Pt w/ HTN"})

        assert response.status_code == 500
        assert response.json() == {"error": "AI request failed", "details": "rate limited"}

    def test_transport_failure(self, client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        app.dependency_overrides[get_llm_engine] = lambda: engine_with(handler)
        response = client.post("/translate", json={"text": "Pt w/ HTN"})

        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}

    def test_malformed_json(self, client):
        response = client.post(
            "/translate",
            content=b"{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
        assert "details" in response.json()

    def test_non_string_text(self, client):
        response = client.post("/translate", json={"text": 5})

        assert response.status_code == 400
        assert set(response.json()) == {"error", "details"}
        assert "text" in response.json()["details"]


class TestSimplifyEndpoint:
    """Test the orchestrated translation endpoint."""

    def test_local_translation(self, client):
        response = client.post("/simplify", json={
            "text": "Pt w/ HTN and DM2 reports dyspnea. Recommend rest."
        })

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "local"
        assert data["degraded"] is False
        assert "high blood pressure" in data["simple"]
        assert data["actions"] == ["Recommend rest"]
        assert "<mark>" in data["markup"]
        assert data["stats"]["clarity"] in ["Easy", "Standard", "Complex"]
        assert data["status"].startswith("Clarity score:")

    def test_highlight_off(self, client):
        response = client.post("/simplify", json={"text": "Pt w/ HTN", "highlight": False})
        assert "<mark>" not in response.json()["markup"]

    def test_empty_text_placeholder(self, client):
        data = client.post("/simplify", json={"text": ""}).json()

        assert data["mode"] == "placeholder"
        assert data["simple"] is None
        assert data["actions"] == []
        assert data["stats"]["word_count"] == 0
        assert data["stats"]["sentence_count"] == 1

    def test_ai_client_crash_falls_back(self, client):
        app.dependency_overrides[get_translator] = lambda: Translator(remote=CrashingRemote())
        response = client.post("/simplify", json={"text": "Pt w/ HTN", "use_ai": True})

        assert response.status_code == 200
        assert response.json()["mode"] == "fallback"

    def test_ai_failure_falls_back(self, client):
        app.dependency_overrides[get_translator] = lambda: Translator(remote=FailingRemote())
        data = client.post("/simplify", json={"text": "Pt w/ HTN", "use_ai": True}).json()

        assert data["mode"] == "fallback"
        assert data["notice"] == "AI service unavailable. Using standard translation."
        assert data["simple"] == "the patient with high blood pressure"
        assert data["actions"]
        assert data["status"].startswith("Standard mode")
        assert data["degraded"] is True


class TestExportAndSamples:
    """Test export and sample endpoints."""

    def test_export(self, client):
        response = client.post("/export", json={"simple": "Rest at home", "actions": ["Rest"]})

        assert response.status_code == 200
        assert response.text == "Rest at home\n\nNext steps:\n- Rest"
        assert "plain-language-summary.txt" in response.headers["content-disposition"]

    def test_samples(self, client):
        data = client.get("/samples").json()
        assert [s["label"] for s in data] == [
            "Hypertension follow-up",
            "Post-op visit",
            "ED discharge",
        ]


class TestMiddleware:
    """Test request limits and headers."""

    def test_body_too_large(self, client):
        payload = b'{"text": "' + b"a" * (1024 * 1024) + b'"}'
        response = client.post(
            "/translate",
            content=payload,
            headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 413
        assert response.json() == {"error": "Payload too large"}

    def test_process_time_header(self, client):
        response = client.get("/health")
        assert "x-process-time" in response.headers

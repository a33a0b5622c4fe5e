"""
Test Suite: FastAPI Contract & Guardrails

These tests exercise the HTTP layer with a Resolver wired to in-memory
providers injected through FastAPI dependency overrides. No provider API is
called and no credential is needed.

Covered:
- /health liveness, API version and provider selection
- /v1/ask response shape, attribution and blank-query handling
- /v1/search raw content
- /v1/diagnostics report
- X-API-Key guard (only when API_KEYS is set)
- X-Request-ID propagation
- credential header redaction for request logs
"""

import pytest
from fastapi.testclient import TestClient

from api.base_provider import BaseProvider
from models import messages
from models.provider_result import ProviderResult, Source
from orchestrator.condenser import Condenser
from orchestrator.core import Resolver
from server.app import create_app
from server.dependencies import get_resolver
from server.schemas.responses import API_VERSION
from server.utils import redact_sensitive_headers

LONG_ANSWER = (
    "Paris is the capital of France and its largest city. It sits on the Seine in the north "
    "of the country and has been the seat of government for centuries. Most national "
    "ministries and both houses of parliament are located there."
)

SEARCH_BLOB = (
    "[1] Markets rally\nURL: https://news.example/1\n"
    "Stocks rose sharply on Monday as investors cheered new inflation data and bond yields fell."
)


class StaticProvider(BaseProvider):
    def __init__(self, name, content, source, source_name=None, real_time=False):
        self.name = name
        self.display_name = name.title()
        self.content = content
        self.result_source = source
        self.source_name = source_name
        self.real_time = real_time
        self.queries = []

    def is_configured(self) -> bool:
        return True

    def _fetch(self, query: str) -> ProviderResult:
        self.queries.append(query)
        return ProviderResult(
            content=self.content,
            source=self.result_source,
            is_real_time=self.real_time,
            provider=self.name,
            source_name=self.source_name,
        )


@pytest.fixture
def providers():
    primary = StaticProvider("primary", "I don't have access to real-time news.", Source.PRIMARY_MODEL)
    fallback = StaticProvider(
        "firecrawl", SEARCH_BLOB, Source.WEB_SEARCH, source_name="Firecrawl Web Search", real_time=True
    )
    return primary, fallback


@pytest.fixture
def client(providers):
    app = create_app()
    resolver = Resolver(*providers, condenser=Condenser())
    app.dependency_overrides[get_resolver] = lambda: resolver
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health_reports_api_version_and_selection(client, monkeypatch):
    monkeypatch.setenv("FALLBACK_PROVIDER", "newsapi")
    monkeypatch.setenv("OPENROUTER_API_KEY", "test-key")

    body = client.get("/health").json()

    assert body["version"] == API_VERSION
    assert body["version"] == client.get("/openapi.json").json()["info"]["version"]
    assert body["fallback_provider"] == "newsapi"
    assert body["routing_policy"] == "primary_first"
    assert body["configured"] is False
    assert body["missing_credentials"] == ["NEWSAPI_KEY"]


def test_ask_uses_fallback_and_attribution(client, providers):
    response = client.post("/v1/ask", json={"query": "latest news today"})

    assert response.status_code == 200
    body = response.json()
    assert body["attribution"] == "Firecrawl Web Search"
    assert body["text"].endswith("\n\nSource: Firecrawl Web Search")
    assert body["text"].startswith(body["answer"])
    assert body["used_fallback"] is True
    assert body["is_real_time"] is True
    assert body["source"] == "WebSearch"
    assert providers[1].queries == ["latest news today"]


def test_ask_blank_query_returns_prompt(client, providers):
    response = client.post("/v1/ask", json={"query": "   "})

    assert response.status_code == 200
    assert response.json()["text"] == messages.EMPTY_QUERY
    assert providers[0].queries == []


def test_ask_rejects_oversized_query(client):
    response = client.post("/v1/ask", json={"query": "x" * 2001})
    assert response.status_code == 422


def test_ask_missing_query_field(client):
    response = client.post("/v1/ask", json={})
    assert response.status_code == 422


def test_search_returns_raw_content(client):
    response = client.post("/v1/search", json={"query": "latest news"})

    assert response.status_code == 200
    assert response.json()["text"] == SEARCH_BLOB


def test_diagnostics_report(client):
    response = client.get("/v1/diagnostics")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert any(line.startswith("✅ Primary (primary)") for line in body["lines"])
    assert body["report"] == "\n".join(body["lines"])


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "voice-123"})
    assert response.headers["X-Request-ID"] == "voice-123"


def test_request_id_is_generated(client):
    response = client.get("/health")
    assert response.headers["X-Request-ID"].startswith("http_")


def test_api_key_required_when_configured(client, monkeypatch):
    monkeypatch.setenv("API_KEYS", "key-one, key-two")

    missing = client.post("/v1/ask", json={"query": "capital of France"})
    wrong = client.post("/v1/ask", json={"query": "capital of France"}, headers={"X-API-Key": "nope"})
    ok = client.post("/v1/ask", json={"query": "capital of France"}, headers={"X-API-Key": "key-two"})

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert ok.status_code == 200


def test_no_api_key_needed_when_unset(client):
    response = client.post("/v1/ask", json={"query": "capital of France"})
    assert response.status_code == 200


def test_ask_primary_answer_has_no_attribution(providers):
    primary = StaticProvider("primary", LONG_ANSWER, Source.PRIMARY_MODEL)
    app = create_app()
    resolver = Resolver(primary, providers[1], condenser=Condenser())
    app.dependency_overrides[get_resolver] = lambda: resolver

    with TestClient(app) as test_client:
        body = test_client.post("/v1/ask", json={"query": "capital of France"}).json()

    assert body["attribution"] is None
    assert body["used_fallback"] is False
    assert "Source:" not in body["text"]


def test_redact_sensitive_headers():
    headers = {
        "X-API-Key": "secret",
        "Authorization": "Bearer sk-123",
        "Cookie": "session=abc",
        "Content-Type": "application/json",
        "Proxy-Authorization": "",
    }

    redacted = redact_sensitive_headers(headers)

    assert redacted["X-API-Key"] == "[REDACTED]"
    assert redacted["Authorization"] == "[REDACTED]"
    assert redacted["Cookie"] == "[REDACTED]"
    assert redacted["Content-Type"] == "application/json"
    assert redacted["Proxy-Authorization"] == ""

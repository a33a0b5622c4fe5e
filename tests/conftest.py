import os

import pytest

# Keep test runs from writing log files into the working tree.
os.environ.setdefault("LOG_TO_FILE", "false")

CONFIG_ENV_VARS = [
    "OPENROUTER_API_KEY",
    "OPENROUTER_BASE_URL",
    "PRIMARY_MODEL",
    "PRIMARY_ATTRIBUTION",
    "SUMMARIZER_ENABLED",
    "SUMMARIZER_MODEL",
    "FALLBACK_PROVIDER",
    "FIRECRAWL_API_KEY",
    "NEWSAPI_KEY",
    "TAVILY_API_KEY",
    "FALLBACK_MAX_RESULTS",
    "FALLBACK_MIN_ITEM_CHARS",
    "ROUTING_POLICY",
    "REQUEST_TIMEOUT_SECONDS",
    "SEARCH_TIMEOUT_SECONDS",
    "API_KEYS",
    "VOXQUERY_HOST",
    "VOXQUERY_PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without provider credentials from the developer's shell."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_env(monkeypatch):
    """Fixture to provide a fully configured environment."""
    env_vars = {
        "OPENROUTER_API_KEY": "test-openrouter-key",
        "FIRECRAWL_API_KEY": "test-firecrawl-key",
        "FALLBACK_PROVIDER": "firecrawl",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def clean_answer():
    """A definitive ~300 character answer with no stale markers."""
    return (
        "Paris is the capital of France and its largest city. It sits on the Seine "
        "in the north of the country and has been the seat of government for centuries. "
        "The city is home to the national assembly, the presidential palace and most "
        "ministries, and it anchors the wider Ile-de-France region."
    )

"""
Tests for ChatModelProvider

These tests validate that completions (and normalized completion errors) are
turned into ProviderResults carrying the exact user-facing message text.
"""

import httpx
import pytest

from api.base_client import BaseAIClient
from api.model_provider import DETAILED_TEMPLATE, DIAGNOSTIC_PROMPT, NEWS_TEMPLATE, ChatModelProvider
from api.openrouter_client import OpenRouterClient
from models import messages
from models.completion import CompletionResponse, NormalizedError
from models.provider_result import ProviderErrorKind, ResultKind, Source


class FakeClient(BaseAIClient):
    provider_name = "fake"

    def __init__(self, api_key="test-key", text="Paris is the capital of France.", error=None):
        super().__init__(api_key, model_name="fake-model")
        self.text = text
        self.error = error
        self.calls = []

    def get_completion(self, prompt: str, **kwargs) -> CompletionResponse:
        self.calls.append((prompt, kwargs))
        return CompletionResponse(
            request_id="req_test",
            text="" if self.error else self.text,
            provider=self.provider_name,
            model=self.model_name,
            latency_ms=5,
            finish_reason="error" if self.error else "stop",
            error=self.error,
        )


def _error(code, message="boom", status_code=None):
    return NormalizedError(code=code, message=message, provider="fake", status_code=status_code)


class TestChatModelProvider:
    def test_success_wraps_query_in_template(self):
        client = FakeClient()
        provider = ChatModelProvider(client)

        result = provider.fetch("  capital of France  ")

        assert result.is_ok
        assert result.source == Source.PRIMARY_MODEL
        assert result.content == "Paris is the capital of France."
        assert result.is_real_time is False
        assert result.attribution is None
        prompt, kwargs = client.calls[0]
        assert prompt == DETAILED_TEMPLATE.render("capital of France")
        assert '"capital of France"' in prompt
        assert kwargs["max_tokens"] == 1500

    def test_source_name_becomes_attribution(self):
        provider = ChatModelProvider(FakeClient(), template=NEWS_TEMPLATE, source_name="DeepSeek News")
        result = provider.fetch("latest news")

        assert result.attribution == "DeepSeek News"

    def test_news_template_budget(self):
        client = FakeClient()
        ChatModelProvider(client, template=NEWS_TEMPLATE).fetch("latest news")
        assert client.calls[0][1]["max_tokens"] == 2000

    def test_blank_query_makes_no_call(self):
        client = FakeClient()
        result = ChatModelProvider(client).fetch("   ")

        assert result.kind == ResultKind.INPUT_ERROR
        assert result.content == messages.EMPTY_QUERY
        assert client.calls == []

    def test_missing_credential(self):
        result = ChatModelProvider(None).fetch("capital of France")

        assert result.kind == ResultKind.CONFIG_ERROR
        assert result.content == (
            "OpenRouter API key is missing. Please configure it in environment variables."
        )

    def test_empty_text_is_empty_result(self):
        result = ChatModelProvider(FakeClient(text="   ")).fetch("obscure thing")

        assert result.kind == ResultKind.EMPTY_RESULT
        assert result.content == messages.no_results("obscure thing")
        assert result.source == Source.NONE

    @pytest.mark.parametrize("code", ["timeout", "network"])
    def test_transport_failures(self, code):
        result = ChatModelProvider(FakeClient(error=_error(code))).fetch("anything")

        assert result.kind == ResultKind.TRANSPORT_ERROR
        assert result.content == messages.NETWORK_ERROR

    def test_bad_request(self):
        result = ChatModelProvider(FakeClient(error=_error("bad_request", "Invalid model", 400))).fetch("q")

        assert result.kind == ResultKind.PROVIDER_ERROR
        assert result.error_kind == ProviderErrorKind.BAD_REQUEST
        assert result.content == "Query error: Invalid model. Please try a different search term."

    def test_auth(self):
        result = ChatModelProvider(FakeClient(error=_error("auth", "Forbidden", 403))).fetch("q")

        assert result.error_kind == ProviderErrorKind.AUTH
        assert result.content == "API key invalid or access denied. Please check your OpenRouter API key."

    def test_rate_limit(self):
        result = ChatModelProvider(FakeClient(error=_error("rate_limit", "slow down", 429))).fetch("q")

        assert result.error_kind == ProviderErrorKind.RATE_LIMIT
        assert result.content == messages.RATE_LIMITED

    def test_generic_status(self):
        result = ChatModelProvider(FakeClient(error=_error("provider_error", "Upstream overloaded", 502))).fetch("q")

        assert result.error_kind == ProviderErrorKind.GENERIC
        assert result.content == "OpenRouter API error (502): Upstream overloaded"

    def test_unknown_error_without_status(self):
        result = ChatModelProvider(FakeClient(error=_error("unknown", "weird"))).fetch("q")

        assert result.kind == ResultKind.PROVIDER_ERROR
        assert result.content == "Search failed: weird. Please try again."

    def test_check_uses_short_prompt(self):
        client = FakeClient(text="Acknowledged.")
        result = ChatModelProvider(client).check()

        assert result.is_ok
        assert client.calls == [(DIAGNOSTIC_PROMPT, {"max_tokens": 50})]

    def test_check_without_credential(self):
        result = ChatModelProvider(FakeClient(api_key="")).check()
        assert result.kind == ResultKind.CONFIG_ERROR


class TestNewsFallbackMessages:
    """The news-template fallback answers every upstream failure with one sentinel."""

    def _provider(self, client):
        return ChatModelProvider(
            client,
            template=NEWS_TEMPLATE,
            name="model_news",
            source_name="DeepSeek News",
            failure_message=messages.no_recent_news,
        )

    @pytest.mark.parametrize(
        "error,kind,error_kind",
        [
            (_error("provider_error", "upstream down", 500), ResultKind.PROVIDER_ERROR, ProviderErrorKind.GENERIC),
            (_error("rate_limit", "slow down", 429), ResultKind.PROVIDER_ERROR, ProviderErrorKind.RATE_LIMIT),
            (_error("network", "refused"), ResultKind.TRANSPORT_ERROR, None),
        ],
    )
    def test_upstream_failure_uses_no_recent_news(self, error, kind, error_kind):
        result = self._provider(FakeClient(error=error)).fetch("mars mission")

        assert result.content == (
            'No recent news found for "mars mission". '
            "The topic may not have recent coverage or try using different keywords."
        )
        assert result.kind == kind
        assert result.error_kind == error_kind
        assert result.attribution is None

    def test_empty_answer_uses_no_recent_news(self):
        result = self._provider(FakeClient(text="")).fetch("mars mission")

        assert result.kind == ResultKind.EMPTY_RESULT
        assert result.content == messages.no_recent_news("mars mission")
        assert messages.is_failure_sentinel(result.content)

    def test_input_and_config_errors_keep_their_messages(self):
        assert self._provider(FakeClient()).fetch("  ").content == messages.EMPTY_QUERY
        assert self._provider(None).fetch("mars").kind == ResultKind.CONFIG_ERROR

    def test_success_is_untouched(self):
        result = self._provider(FakeClient(text="Rover landed.")).fetch("mars mission")
        assert result.content == "Rover landed."
        assert result.attribution == "DeepSeek News"

    def test_openrouter_500_through_sdk(self):
        http_client = httpx.Client(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(500, json={"error": {"message": "upstream down", "code": 500}})
            )
        )
        client = OpenRouterClient("test-key", base_url="https://openrouter.test/api/v1", http_client=http_client)

        result = self._provider(client).fetch("mars mission")

        assert result.content == messages.no_recent_news("mars mission")
        assert result.kind == ResultKind.PROVIDER_ERROR
        assert result.metadata["status_code"] == 500

"""Chat-model provider: wraps a BaseAIClient and turns completions into ProviderResults."""

from dataclasses import dataclass, replace
from typing import Callable

from models import messages
from models.completion import CompletionResponse
from models.provider_result import ProviderErrorKind, ProviderResult, ResultKind, Source
from utils.logger import get_logger

from .base_client import BaseAIClient
from .base_provider import BaseProvider

logger = get_logger(__name__)


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    text: str
    max_tokens: int
    temperature: float = 0.7

    def render(self, query: str) -> str:
        return self.text.format(query=query)


DETAILED_TEMPLATE = PromptTemplate(
    name="detailed",
    text=(
        'Please provide a detailed and informative response about: "{query}".\n'
        "Include relevant facts, recent developments if known, and context.\n"
        "If this involves current events or recent news, provide the most "
        "up-to-date information available to you.\n"
        "Make your response comprehensive and informative, at least 200 words."
    ),
    max_tokens=1500,
)

NEWS_TEMPLATE = PromptTemplate(
    name="news",
    text=(
        'Provide recent news and information about: "{query}".\n'
        "Focus on current events, recent developments, and newsworthy information.\n"
        "If you have knowledge about recent events related to this topic, please share them.\n"
        "Include specific details, dates when possible, and context.\n"
        "Make your response informative and news-focused, at least 250 words."
    ),
    max_tokens=2000,
)

DIAGNOSTIC_PROMPT = "Test query - please respond with a brief acknowledgment."


class ChatModelProvider(BaseProvider):
    """
    Language-model provider.

    Used as the primary source with the detailed template, and as a
    fallback with the news template when no search backend is configured.
    """

    source = Source.PRIMARY_MODEL

    def __init__(
        self,
        client: BaseAIClient | None,
        *,
        template: PromptTemplate = DETAILED_TEMPLATE,
        name: str = "openrouter",
        display_name: str = "OpenRouter",
        source_name: str | None = None,
        failure_message: Callable[[str], str] | None = None,
    ):
        """
        Args:
            client: Chat client, or None when the credential is not configured
            template: Prompt wrapped around the user's query
            name: Short provider name used in logs and metadata
            display_name: Name used in user-facing error messages
            source_name: Attribution line for successful answers (None = no attribution)
            failure_message: Builds the message for any upstream failure or empty
                answer from the query. None keeps the per-error messages.
        """
        self.client = client
        self.template = template
        self.name = name
        self.display_name = display_name
        self.source_name = source_name
        self.failure_message = failure_message

    def is_configured(self) -> bool:
        return self.client is not None and bool(self.client.api_key)

    def _fetch(self, query: str) -> ProviderResult:
        response = self.client.get_completion(
            self.template.render(query),
            max_tokens=self.template.max_tokens,
            temperature=self.template.temperature,
        )

        if response.is_error:
            return self._with_failure_message(self._error_result(response), query)

        text = (response.text or "").strip()
        if not text:
            logger.warning(
                "Model returned an empty answer",
                extra={"extra_fields": {"provider": self.name, "request_id": response.request_id}},
            )
            return self._with_failure_message(
                ProviderResult(
                    content=messages.no_results(query),
                    source=Source.NONE,
                    kind=ResultKind.EMPTY_RESULT,
                    provider=self.name,
                    latency_ms=response.latency_ms,
                ),
                query,
            )

        return ProviderResult(
            content=text,
            source=self.source,
            kind=ResultKind.OK,
            is_real_time=False,
            provider=self.name,
            source_name=self.source_name,
            latency_ms=response.latency_ms,
            metadata={
                "model": response.model,
                "template": self.template.name,
                "tokens": response.token_usage.total_tokens,
                "finish_reason": response.finish_reason,
            },
        )

    def check(self) -> ProviderResult:
        """Send a short acknowledgment prompt instead of a full templated query."""
        if not self.is_configured():
            return ProviderResult.config_error(provider=self.name, display_name=self.display_name)

        response = self.client.get_completion(DIAGNOSTIC_PROMPT, max_tokens=50)
        if response.is_error:
            return self._error_result(response)
        if not (response.text or "").strip():
            return ProviderResult(
                content=messages.no_results(DIAGNOSTIC_PROMPT),
                source=Source.NONE,
                kind=ResultKind.EMPTY_RESULT,
                provider=self.name,
                latency_ms=response.latency_ms,
            )
        return ProviderResult(
            content=response.text.strip(),
            source=self.source,
            provider=self.name,
            latency_ms=response.latency_ms,
        )

    def _error_result(self, response: CompletionResponse) -> ProviderResult:
        error = response.error
        code = error.code

        if code in ("timeout", "network"):
            return ProviderResult.transport_error(provider=self.name, latency_ms=response.latency_ms)

        if code == "bad_request":
            error_kind = ProviderErrorKind.BAD_REQUEST
            content = messages.QUERY_REJECTED.format(message=error.message)
        elif code == "auth":
            error_kind = ProviderErrorKind.AUTH
            content = messages.CREDENTIAL_DENIED.format(provider=self.display_name)
        elif code == "rate_limit":
            error_kind = ProviderErrorKind.RATE_LIMIT
            content = messages.RATE_LIMITED
        elif error.status_code is not None:
            error_kind = ProviderErrorKind.GENERIC
            content = messages.PROVIDER_ERROR.format(
                provider=self.display_name, code=error.status_code, message=error.message
            )
        else:
            error_kind = ProviderErrorKind.GENERIC
            content = messages.search_failed(error.message)

        return ProviderResult(
            content=content,
            source=Source.NONE,
            kind=ResultKind.PROVIDER_ERROR,
            provider=self.name,
            error_kind=error_kind,
            latency_ms=response.latency_ms,
            metadata={"status_code": error.status_code, "error_code": code},
        )

    def _with_failure_message(self, result: ProviderResult, query: str) -> ProviderResult:
        if self.failure_message is None:
            return result
        return replace(result, content=self.failure_message(query))

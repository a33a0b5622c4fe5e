import time
import uuid
from abc import ABC, abstractmethod
from typing import Any

import openai

from models.completion import CompletionResponse, NormalizedError, TokenUsage


class BaseAIClient(ABC):
    """
    Abstract base class for chat-completion clients.

    Subclasses return a CompletionResponse from every call. Upstream failures
    are normalized into ``CompletionResponse.error``; nothing is raised.
    """

    provider_name = "base"

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the AI client.

        Args:
            api_key: API key for the AI service
            **kwargs: Additional model-specific parameters
        """
        self.api_key = api_key
        self.model_name = kwargs.get('model_name')

    @abstractmethod
    def get_completion(self, prompt: str, **kwargs) -> CompletionResponse:
        """
        Get a completion from the AI model.

        Args:
            prompt: The input prompt to send to the model
            **kwargs: Additional parameters for the API call

        Returns:
            CompletionResponse with either text or a normalized error
        """

    def _generate_request_id(self) -> str:
        return f"req_{uuid.uuid4().hex[:12]}"

    def _measure_latency(self, start_time: float) -> int:
        return int((time.time() - start_time) * 1000)

    def _normalize_finish_reason(self, reason: str | None) -> str | None:
        if reason in (None, "stop", "length", "content_filter"):
            return reason
        if reason in ("tool_calls", "function_call"):
            return "tool"
        return reason

    def _normalize_error(self, exc: Exception, provider: str) -> NormalizedError:
        """
        Map an exception raised by the SDK or transport to a NormalizedError.

        HTTP errors keep the effective status code: the ``code`` field of the
        provider's error body when it is numeric, otherwise the HTTP status.
        """
        if isinstance(exc, (openai.APITimeoutError, TimeoutError)):
            return NormalizedError(
                code="timeout", message=str(exc) or "Request timed out",
                provider=provider, retryable=True,
            )

        if isinstance(exc, (openai.APIConnectionError, ConnectionError)):
            return NormalizedError(
                code="network", message=str(exc) or "Connection error",
                provider=provider, retryable=True,
            )

        if isinstance(exc, openai.APIStatusError):
            body = exc.body if isinstance(exc.body, dict) else {}
            status_code = _as_int(body.get("code")) or exc.status_code
            message = str(body.get("message") or exc.message or "Unknown API error")
            return NormalizedError(
                code=_code_for_status(status_code),
                message=message,
                provider=provider,
                status_code=status_code,
                retryable=status_code == 429 or status_code >= 500,
                details={"http_status": exc.status_code},
            )

        text = str(exc).lower()
        if "timed out" in text or "timeout" in text:
            return NormalizedError(code="timeout", message=str(exc), provider=provider, retryable=True)
        if "401" in text or "403" in text or "unauthorized" in text:
            return NormalizedError(code="auth", message=str(exc), provider=provider)
        if "429" in text or "too many requests" in text:
            return NormalizedError(code="rate_limit", message=str(exc), provider=provider, retryable=True)
        if "400" in text or "bad request" in text:
            return NormalizedError(code="bad_request", message=str(exc), provider=provider)
        if any(code in text for code in ("500", "502", "503", "504")):
            return NormalizedError(code="provider_error", message=str(exc), provider=provider, retryable=True)

        return NormalizedError(
            code="unknown",
            message=str(exc) or type(exc).__name__,
            provider=provider,
            details={"error_type": type(exc).__name__},
        )

    def _create_error_response(
        self, *, request_id: str, error: NormalizedError, latency_ms: int, model: str
    ) -> CompletionResponse:
        return CompletionResponse(
            request_id=request_id,
            text="",
            provider=error.provider,
            model=model,
            latency_ms=latency_ms,
            token_usage=TokenUsage(),
            finish_reason="error",
            error=error,
        )

    def get_token_usage(self, response: Any) -> TokenUsage:
        """
        Extract token usage from an SDK response object.

        Args:
            response: The raw response from the model API

        Returns:
            TokenUsage, zeroed when the provider did not report usage
        """
        usage = getattr(response, "usage", None)
        if usage is None:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _code_for_status(status_code: int) -> str:
    if status_code == 400:
        return "bad_request"
    if status_code in (401, 403):
        return "auth"
    if status_code == 429:
        return "rate_limit"
    if status_code == 408:
        return "timeout"
    return "provider_error"

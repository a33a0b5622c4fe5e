import time

import httpx
import openai

from models.completion import CompletionResponse
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "deepseek/deepseek-r1"


class OpenRouterClient(BaseAIClient):
    """
    OpenRouter chat-completion client returning CompletionResponse.

    Uses the OpenAI SDK with a custom base URL since OpenRouter is
    OpenAI-compatible. Automatic retries are disabled: rate-limit and
    transport failures go straight back to the caller.
    """

    provider_name = "openrouter"

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
        **kwargs,
    ):
        """
        Initialize the OpenRouter client.

        Args:
            api_key: The OpenRouter API key
            model_name: Model identifier (default: deepseek/deepseek-r1)
            base_url: API root, overridable for other OpenAI-compatible hosts
            timeout: Per-request timeout in seconds
            http_client: Optional preconfigured httpx client (used by tests)
            **kwargs: Additional keyword arguments
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        self.model_name = model_name
        self.base_url = base_url
        self.client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    def get_completion(self, prompt: str, **kwargs) -> CompletionResponse:
        """
        Send a single user-role message and return the normalized result.

        Args:
            prompt: Fully templated prompt text
            **kwargs: Additional parameters:
                - model: Override the default model for this call
                - temperature: Controls randomness (0.0 to 2.0)
                - max_tokens: Maximum number of tokens to generate

        Returns:
            CompletionResponse: text may be empty when the provider returned no answer

        IMPORTANT: Never raises exceptions - returns CompletionResponse with error instead
        """
        request_id = self._generate_request_id()
        start_time = time.time()

        model = kwargs.get("model", self.model_name)
        temperature = kwargs.get("temperature", 0.7)
        max_tokens = kwargs.get("max_tokens", 1500)

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )

            latency_ms = self._measure_latency(start_time)

            choices = response.choices or []
            text = ""
            finish_reason = None
            if choices:
                text = (choices[0].message.content or "") if choices[0].message else ""
                finish_reason = self._normalize_finish_reason(choices[0].finish_reason)

            token_usage = self.get_token_usage(response)

            logger.info(
                "OpenRouter completion successful",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model,
                        "latency_ms": latency_ms,
                        "tokens": token_usage.total_tokens,
                        "empty": not text.strip(),
                    }
                },
            )

            return CompletionResponse(
                request_id=request_id,
                text=text,
                provider=self.provider_name,
                model=model,
                latency_ms=latency_ms,
                token_usage=token_usage,
                finish_reason=finish_reason,
            )

        except Exception as e:
            latency_ms = self._measure_latency(start_time)
            error = self._normalize_error(e, provider=self.provider_name)

            logger.error(
                f"OpenRouter completion failed: {error.code}",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model,
                        "error_code": error.code,
                        "status_code": error.status_code,
                        "error_message": error.message,
                        "retryable": error.retryable,
                    }
                },
            )

            return self._create_error_response(
                request_id=request_id, error=error, latency_ms=latency_ms, model=model
            )

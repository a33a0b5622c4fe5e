from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional

FinishReason = Optional[Literal["stop", "length", "tool", "content_filter", "error"]]

ERROR_CODES = {
    "timeout",
    "network",
    "auth",
    "rate_limit",
    "bad_request",
    "provider_error",
    "unknown",
}


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0 and (self.prompt_tokens > 0 or self.completion_tokens > 0):
            object.__setattr__(self, "total_tokens", self.prompt_tokens + self.completion_tokens)


@dataclass(frozen=True)
class NormalizedError:
    code: str
    message: str
    provider: str
    status_code: int | None = None
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.code not in ERROR_CODES:
            object.__setattr__(self, "code", "unknown")


@dataclass(frozen=True)
class CompletionResponse:
    """Normalized result of one chat-completion call. Clients return it, never raise."""

    request_id: str
    text: str
    provider: str
    model: str
    latency_ms: int
    token_usage: TokenUsage = field(default_factory=TokenUsage)

    finish_reason: FinishReason = None
    error: NormalizedError | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat() + "Z")

    def __post_init__(self):
        valid_reasons = {"stop", "length", "tool", "content_filter", "error", None}
        if self.finish_reason not in valid_reasons:
            # keep the provider's reason for debugging
            md = dict(self.metadata)
            md.setdefault("provider_finish_reason", self.finish_reason)
            object.__setattr__(self, "metadata", md)
            object.__setattr__(self, "finish_reason", None)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "text": self.text if len(self.text) <= 200 else self.text[:200] + "...",
            "provider": self.provider,
            "model": self.model,
            "latency_ms": self.latency_ms,
            "token_usage": {
                "prompt_tokens": self.token_usage.prompt_tokens,
                "completion_tokens": self.token_usage.completion_tokens,
                "total_tokens": self.token_usage.total_tokens,
            },
            "finish_reason": self.finish_reason,
            "error": (
                {
                    "code": self.error.code,
                    "message": self.error.message,
                    "provider": self.error.provider,
                    "status_code": self.error.status_code,
                    "retryable": self.error.retryable,
                    "details": self.error.details,
                }
                if self.error
                else None
            ),
            "timestamp": self.timestamp,
        }

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from models import messages


class Source(str, Enum):
    PRIMARY_MODEL = "PrimaryModel"
    WEB_SEARCH = "WebSearch"
    NONE = "None"


class ResultKind(str, Enum):
    OK = "ok"
    INPUT_ERROR = "input_error"
    CONFIG_ERROR = "config_error"
    PROVIDER_ERROR = "provider_error"
    TRANSPORT_ERROR = "transport_error"
    EMPTY_RESULT = "empty_result"


class ProviderErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    GENERIC = "generic"


@dataclass(frozen=True)
class ProviderResult:
    """
    Outcome of exactly one fetch call.

    Failures are ordinary results: ``kind`` tags the failure class and
    ``content`` carries the message the user will hear.
    """

    content: str
    source: Source
    kind: ResultKind = ResultKind.OK
    is_real_time: bool = False
    provider: str = ""
    source_name: str | None = None
    error_kind: ProviderErrorKind | None = None
    latency_ms: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_ok(self) -> bool:
        return self.kind == ResultKind.OK

    @property
    def is_error(self) -> bool:
        return self.kind != ResultKind.OK

    @property
    def attribution(self) -> str | None:
        """Name to credit, only for usable content from a named source."""
        if self.is_ok and self.source != Source.NONE and self.source_name:
            return self.source_name
        return None

    @classmethod
    def input_error(cls, provider: str = "") -> "ProviderResult":
        return cls(
            content=messages.EMPTY_QUERY,
            source=Source.NONE,
            kind=ResultKind.INPUT_ERROR,
            provider=provider,
        )

    @classmethod
    def config_error(cls, provider: str, display_name: str) -> "ProviderResult":
        return cls(
            content=messages.missing_credential(display_name),
            source=Source.NONE,
            kind=ResultKind.CONFIG_ERROR,
            provider=provider,
        )

    @classmethod
    def transport_error(cls, provider: str, latency_ms: int = 0) -> "ProviderResult":
        return cls(
            content=messages.NETWORK_ERROR,
            source=Source.NONE,
            kind=ResultKind.TRANSPORT_ERROR,
            provider=provider,
            latency_ms=latency_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content if len(self.content) <= 200 else self.content[:200] + "...",
            "source": self.source.value,
            "kind": self.kind.value,
            "is_real_time": self.is_real_time,
            "provider": self.provider,
            "source_name": self.source_name,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "latency_ms": self.latency_ms,
        }


@dataclass(frozen=True)
class FinalAnswer:
    """Terminal artifact handed to the caller for display or speech."""

    text: str
    attribution: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        if self.attribution:
            return f"{self.text}\n\nSource: {self.attribution}"
        return self.text

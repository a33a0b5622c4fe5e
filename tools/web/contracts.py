"""Data contracts for the real-time search backends."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SearchItem:
    """One result returned by a search or news backend."""

    title: str
    url: str
    content: str = ""
    publisher: str = ""


@dataclass
class SearchResponse:
    """Normalized outcome of one search call. Backends return it, never raise."""

    success: bool
    items: list[SearchItem] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None  # "network"|"auth"|"rate_limit"|"bad_request"|"provider_error"
    status_code: int | None = None
    latency_ms: int = 0

    @classmethod
    def failure(
        cls, error: str, error_code: str, status_code: int | None = None
    ) -> "SearchResponse":
        return cls(success=False, error=error, error_code=error_code, status_code=status_code)

"""Shared HTTP plumbing for search backends."""

import contextlib
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from utils.logger import get_logger

from .contracts import SearchItem, SearchResponse

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 15.0


def status_to_error_code(status_code: int) -> str:
    if status_code == 400:
        return "bad_request"
    if status_code in (401, 403):
        return "auth"
    if status_code == 429:
        return "rate_limit"
    return "provider_error"


class BaseSearchClient(ABC):
    """
    Base class for search backends.

    Subclasses build the request and parse the payload; this class owns the
    transport, status handling and logging. ``search`` never raises.
    """

    name = "search"
    display_name = "Search"
    source_name = "Web Search"

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
        http_client: httpx.Client | None = None,
    ):
        """
        Args:
            api_key: Backend credential (may be empty; the provider checks it)
            timeout: Per-request timeout in seconds
            http_client: Optional preconfigured httpx client (used by tests)
        """
        self.api_key = api_key
        self.timeout = timeout
        self._http_client = http_client

    @abstractmethod
    def _send(self, client: httpx.Client, query: str, max_results: int) -> httpx.Response:
        """Issue the HTTP request for ``query``."""

    @abstractmethod
    def _parse(self, payload: dict[str, Any]) -> SearchResponse:
        """Turn a decoded 2xx payload into a SearchResponse."""

    def _client(self):
        if self._http_client is not None:
            return contextlib.nullcontext(self._http_client)
        return httpx.Client(timeout=self.timeout)

    def _error_message(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text[:200] or response.reason_phrase
        if isinstance(payload, dict):
            error = payload.get("error") or payload.get("message") or payload.get("detail")
            if isinstance(error, dict):
                error = error.get("message")
            if error:
                return str(error)
        return response.reason_phrase

    def search(self, query: str, max_results: int = 5) -> SearchResponse:
        start_time = time.time()
        try:
            with self._client() as client:
                response = self._send(client, query, max_results)
        except httpx.TimeoutException as e:
            logger.warning(
                f"{self.display_name} request timed out",
                extra={"extra_fields": {"provider": self.name, "error": str(e)}},
            )
            return SearchResponse.failure(str(e) or "timeout", "network")
        except httpx.HTTPError as e:
            logger.warning(
                f"{self.display_name} request failed",
                extra={"extra_fields": {"provider": self.name, "error": str(e), "error_type": type(e).__name__}},
            )
            return SearchResponse.failure(str(e) or type(e).__name__, "network")

        latency_ms = int((time.time() - start_time) * 1000)

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(
                f"{self.display_name} returned HTTP {response.status_code}",
                extra={
                    "extra_fields": {
                        "provider": self.name,
                        "status_code": response.status_code,
                        "error_message": message,
                    }
                },
            )
            return SearchResponse.failure(
                message, status_to_error_code(response.status_code), response.status_code
            )

        try:
            payload = response.json() if response.content else {}
        except ValueError:
            return SearchResponse.failure("invalid JSON payload", "provider_error", response.status_code)

        if not isinstance(payload, dict):
            return SearchResponse.failure("unexpected payload shape", "provider_error", response.status_code)

        try:
            result = self._parse(payload)
        except (AttributeError, TypeError, KeyError, ValueError) as e:
            logger.error(
                f"{self.display_name} returned an unexpected payload",
                extra={"extra_fields": {"provider": self.name, "error": str(e), "error_type": type(e).__name__}},
            )
            return SearchResponse.failure("unexpected payload shape", "provider_error", response.status_code)

        result.status_code = response.status_code
        result.latency_ms = latency_ms

        logger.info(
            f"{self.display_name} search complete",
            extra={
                "extra_fields": {
                    "provider": self.name,
                    "success": result.success,
                    "items": len(result.items),
                    "latency_ms": latency_ms,
                }
            },
        )
        return result


def clean_text(value: Any) -> str:
    return " ".join(str(value or "").split())


def item_from_fields(title: Any, url: Any, content: Any, publisher: Any = "") -> SearchItem:
    url_text = str(url or "").strip()
    return SearchItem(
        title=clean_text(title) or url_text or "Untitled",
        url=url_text,
        content=str(content or "").strip(),
        publisher=clean_text(publisher),
    )

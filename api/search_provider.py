"""Real-time fallback provider backed by a web-search or news backend."""

import time

from models import messages
from models.provider_result import ProviderErrorKind, ProviderResult, ResultKind, Source
from tools.web.base_client import BaseSearchClient
from tools.web.research_pack import build_combined_content, select_items
from utils.logger import get_logger

from .base_provider import BaseProvider

logger = get_logger(__name__)

_ERROR_KINDS = {
    "network": ResultKind.TRANSPORT_ERROR,
    "auth": ResultKind.PROVIDER_ERROR,
    "rate_limit": ResultKind.PROVIDER_ERROR,
    "bad_request": ResultKind.PROVIDER_ERROR,
    "provider_error": ResultKind.PROVIDER_ERROR,
}

_PROVIDER_ERROR_KINDS = {
    "auth": ProviderErrorKind.AUTH,
    "rate_limit": ProviderErrorKind.RATE_LIMIT,
    "bad_request": ProviderErrorKind.BAD_REQUEST,
    "provider_error": ProviderErrorKind.GENERIC,
}


class WebSearchProvider(BaseProvider):
    """
    Fetches top-K results from a search backend and combines them.

    Any upstream failure, and a response with no usable items, is answered
    with the "no real-time results" message; ``kind`` still records which
    failure class occurred.
    """

    source = Source.WEB_SEARCH

    def __init__(self, client: BaseSearchClient, *, max_results: int = 5, min_item_chars: int = 50):
        self.client = client
        self.max_results = max_results
        self.min_item_chars = min_item_chars
        self.name = client.name
        self.display_name = client.display_name
        self.source_name = client.source_name

    def is_configured(self) -> bool:
        return bool(self.client.api_key)

    def _fetch(self, query: str) -> ProviderResult:
        start_time = time.time()
        response = self.client.search(query, max_results=self.max_results)
        latency_ms = int((time.time() - start_time) * 1000)

        if not response.success:
            kind = _ERROR_KINDS.get(response.error_code or "", ResultKind.PROVIDER_ERROR)
            logger.warning(
                "Fallback search failed",
                extra={
                    "extra_fields": {
                        "provider": self.name,
                        "error_code": response.error_code,
                        "status_code": response.status_code,
                        "error": response.error,
                    }
                },
            )
            return ProviderResult(
                content=messages.no_real_time_results(query),
                source=Source.NONE,
                kind=kind,
                provider=self.name,
                error_kind=_PROVIDER_ERROR_KINDS.get(response.error_code or "")
                if kind == ResultKind.PROVIDER_ERROR
                else None,
                latency_ms=latency_ms,
                metadata={"error": response.error, "status_code": response.status_code},
            )

        items = select_items(response.items, max_results=self.max_results, min_chars=self.min_item_chars)
        if not items:
            logger.info(
                "Fallback search returned no usable items",
                extra={"extra_fields": {"provider": self.name, "raw_items": len(response.items)}},
            )
            return ProviderResult(
                content=messages.no_real_time_results(query),
                source=Source.NONE,
                kind=ResultKind.EMPTY_RESULT,
                provider=self.name,
                latency_ms=latency_ms,
                metadata={"raw_items": len(response.items)},
            )

        return ProviderResult(
            content=build_combined_content(items),
            source=self.source,
            kind=ResultKind.OK,
            is_real_time=True,
            provider=self.name,
            source_name=self.source_name,
            latency_ms=latency_ms,
            metadata={
                "raw_items": len(response.items),
                "items": len(items),
                "urls": [item.url for item in items],
            },
        )

"""Firecrawl search-and-scrape backend."""

from typing import Any

import httpx

from .base_client import BaseSearchClient, item_from_fields
from .contracts import SearchResponse

FIRECRAWL_SEARCH_URL = "https://api.firecrawl.dev/v1/search"


class FirecrawlSearchClient(BaseSearchClient):
    """
    Searches the web and scrapes each hit to markdown in one call.

    Response shape: ``{"success": bool, "data": [{"markdown"|"content"|"description", "url", "title"}]}``
    or ``{"success": false, "error": "..."}``.
    """

    name = "firecrawl"
    display_name = "Firecrawl"
    source_name = "Firecrawl Web Search"

    def __init__(self, api_key: str, *, search_url: str = FIRECRAWL_SEARCH_URL, **kwargs):
        super().__init__(api_key, **kwargs)
        self.search_url = search_url

    def _send(self, client: httpx.Client, query: str, max_results: int) -> httpx.Response:
        return client.post(
            self.search_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "query": query,
                "limit": max_results,
                "scrapeOptions": {"formats": ["markdown"], "onlyMainContent": True},
            },
        )

    def _parse(self, payload: dict[str, Any]) -> SearchResponse:
        if not payload.get("success", False):
            return SearchResponse.failure(str(payload.get("error") or "search unsuccessful"), "provider_error")

        items = []
        for entry in payload.get("data") or []:
            if not isinstance(entry, dict):
                continue
            metadata = entry.get("metadata")
            if not isinstance(metadata, dict):
                metadata = {}
            items.append(
                item_from_fields(
                    title=entry.get("title") or metadata.get("title"),
                    url=entry.get("url") or metadata.get("sourceURL"),
                    content=entry.get("markdown") or entry.get("content") or entry.get("description"),
                )
            )
        return SearchResponse(success=True, items=items)

"""Tavily search backend.

Tavily returns extracted page content per hit, so no separate scrape step is
needed. Called over plain HTTP; the key travels in the request body.
"""

from typing import Any

import httpx

from .base_client import BaseSearchClient, item_from_fields
from .contracts import SearchResponse

TAVILY_SEARCH_URL = "https://api.tavily.com/search"


class TavilySearchClient(BaseSearchClient):
    name = "tavily"
    display_name = "Tavily"
    source_name = "Tavily Web Search"

    def __init__(self, api_key: str, *, search_url: str = TAVILY_SEARCH_URL, search_depth: str = "advanced", **kwargs):
        super().__init__(api_key, **kwargs)
        self.search_url = search_url
        self.search_depth = search_depth

    def _send(self, client: httpx.Client, query: str, max_results: int) -> httpx.Response:
        return client.post(
            self.search_url,
            json={
                "api_key": self.api_key,
                "query": query,
                "search_depth": self.search_depth,
                "include_answer": False,
                "max_results": max(1, min(int(max_results), 10)),
            },
        )

    def _parse(self, payload: dict[str, Any]) -> SearchResponse:
        items = [
            item_from_fields(
                title=result.get("title"),
                url=result.get("url"),
                content=result.get("content"),
            )
            for result in payload.get("results") or []
            if isinstance(result, dict)
        ]
        return SearchResponse(success=True, items=items)

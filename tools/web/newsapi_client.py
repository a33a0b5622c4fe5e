"""NewsAPI news-index backend."""

import re
from typing import Any

import httpx

from .base_client import BaseSearchClient, item_from_fields
from .contracts import SearchResponse

NEWSAPI_EVERYTHING_URL = "https://newsapi.org/v2/everything"

# NewsAPI cuts article bodies and appends a marker like "… [+2345 chars]"
_TRUNCATION_MARKER = re.compile(r"\s*(…|\.\.\.)?\s*\[\+\d+ chars\]\s*$")


class NewsApiClient(BaseSearchClient):
    """
    Queries the NewsAPI /everything endpoint, newest articles first.

    Response shape: ``{"status": "ok"|"error", "articles": [{title, description, content, url, source: {name}}]}``.
    """

    name = "newsapi"
    display_name = "NewsAPI"
    source_name = "NewsAPI"

    def __init__(self, api_key: str, *, search_url: str = NEWSAPI_EVERYTHING_URL, language: str = "en", **kwargs):
        super().__init__(api_key, **kwargs)
        self.search_url = search_url
        self.language = language

    def _send(self, client: httpx.Client, query: str, max_results: int) -> httpx.Response:
        return client.get(
            self.search_url,
            headers={"X-Api-Key": self.api_key},
            params={
                "q": query,
                "pageSize": max_results,
                "sortBy": "publishedAt",
                "language": self.language,
            },
        )

    def _parse(self, payload: dict[str, Any]) -> SearchResponse:
        if payload.get("status") != "ok":
            return SearchResponse.failure(str(payload.get("message") or "news search unsuccessful"), "provider_error")

        items = []
        for article in payload.get("articles") or []:
            if not isinstance(article, dict):
                continue
            source = article.get("source")
            description = str(article.get("description") or "").strip()
            body = _TRUNCATION_MARKER.sub("", str(article.get("content") or "").strip())
            parts = [description]
            if body and body not in description:
                parts.append(body)
            items.append(
                item_from_fields(
                    title=article.get("title"),
                    url=article.get("url"),
                    content=" ".join(p for p in parts if p),
                    publisher=source.get("name") if isinstance(source, dict) else None,
                )
            )
        return SearchResponse(success=True, items=items)

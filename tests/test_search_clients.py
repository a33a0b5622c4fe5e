import json

import httpx
import pytest

from tools.web.firecrawl_client import FirecrawlSearchClient
from tools.web.newsapi_client import NewsApiClient
from tools.web.tavily_client import TavilySearchClient


def _http(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestFirecrawl:
    def test_request_shape_and_parsing(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": [
                        {"title": "Story one", "url": "https://a.example/1", "markdown": "# Body one"},
                        {"url": "https://a.example/2", "description": "Only a description"},
                        {"metadata": {"title": "Meta title", "sourceURL": "https://a.example/3"}, "content": "c"},
                    ],
                },
            )

        client = FirecrawlSearchClient("fc-key", http_client=_http(handler))
        response = client.search("latest news today", max_results=3)

        assert seen["method"] == "POST"
        assert seen["url"] == "https://api.firecrawl.dev/v1/search"
        assert seen["auth"] == "Bearer fc-key"
        assert seen["body"] == {
            "query": "latest news today",
            "limit": 3,
            "scrapeOptions": {"formats": ["markdown"], "onlyMainContent": True},
        }
        assert response.success
        assert response.status_code == 200
        assert [item.title for item in response.items] == ["Story one", "https://a.example/2", "Meta title"]
        assert response.items[0].content == "# Body one"
        assert response.items[1].content == "Only a description"
        assert response.items[2].url == "https://a.example/3"

    def test_unsuccessful_payload(self):
        client = FirecrawlSearchClient(
            "fc-key", http_client=_http(lambda r: httpx.Response(200, json={"success": False, "error": "quota"}))
        )
        response = client.search("q")

        assert response.success is False
        assert response.error == "quota"
        assert response.error_code == "provider_error"

    @pytest.mark.parametrize(
        "status,expected",
        [(400, "bad_request"), (401, "auth"), (403, "auth"), (429, "rate_limit"), (500, "provider_error")],
    )
    def test_http_status_mapping(self, status, expected):
        client = FirecrawlSearchClient(
            "fc-key", http_client=_http(lambda r: httpx.Response(status, json={"error": "nope"}))
        )
        response = client.search("q")

        assert response.success is False
        assert response.error_code == expected
        assert response.status_code == status
        assert response.error == "nope"

    def test_connection_error_is_network(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        response = FirecrawlSearchClient("fc-key", http_client=_http(handler)).search("q")

        assert response.success is False
        assert response.error_code == "network"

    def test_timeout_is_network(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        response = FirecrawlSearchClient("fc-key", http_client=_http(handler)).search("q")
        assert response.error_code == "network"

    def test_invalid_json(self):
        client = FirecrawlSearchClient("fc-key", http_client=_http(lambda r: httpx.Response(200, text="<html>")))
        response = client.search("q")

        assert response.success is False
        assert response.error_code == "provider_error"


class TestNewsApi:
    def test_request_shape_and_parsing(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            seen["key"] = request.headers.get("x-api-key")
            return httpx.Response(
                200,
                json={
                    "status": "ok",
                    "totalResults": 1,
                    "articles": [
                        {
                            "source": {"id": None, "name": "Example Times"},
                            "title": "Markets rally",
                            "description": "Stocks rose sharply on Monday.",
                            "content": "Investors cheered new data showing inflation cooling… [+2345 chars]",
                            "url": "https://news.example/markets",
                        }
                    ],
                },
            )

        response = NewsApiClient("news-key", http_client=_http(handler)).search("markets", max_results=4)

        assert seen["key"] == "news-key"
        assert seen["url"].path == "/v2/everything"
        assert seen["url"].params["q"] == "markets"
        assert seen["url"].params["pageSize"] == "4"
        assert seen["url"].params["sortBy"] == "publishedAt"
        item = response.items[0]
        assert item.publisher == "Example Times"
        assert item.content == (
            "Stocks rose sharply on Monday. Investors cheered new data showing inflation cooling"
        )
        assert "[+2345 chars]" not in item.content

    def test_error_status_in_payload(self):
        client = NewsApiClient(
            "news-key",
            http_client=_http(lambda r: httpx.Response(200, json={"status": "error", "message": "bad query"})),
        )
        response = client.search("q")

        assert response.success is False
        assert response.error == "bad query"

    def test_unauthorized(self):
        client = NewsApiClient(
            "bad-key",
            http_client=_http(
                lambda r: httpx.Response(401, json={"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid"})
            ),
        )
        response = client.search("q")

        assert response.error_code == "auth"
        assert response.error == "Your API key is invalid"


class TestTavily:
    def test_request_shape_and_parsing(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "results": [
                        {"title": "Result", "url": "https://t.example/1", "content": "Extracted page content."},
                        "junk",
                    ]
                },
            )

        response = TavilySearchClient("tv-key", http_client=_http(handler)).search("q", max_results=25)

        assert seen["body"]["api_key"] == "tv-key"
        assert seen["body"]["max_results"] == 10
        assert len(response.items) == 1
        assert response.items[0].content == "Extracted page content."


class TestMalformedPayloads:
    def test_newsapi_string_source_is_ignored(self):
        payload = {
            "status": "ok",
            "articles": [
                {
                    "source": "Reuters",
                    "title": "Markets rally",
                    "description": "Stocks rose sharply on Monday.",
                    "content": None,
                    "url": "https://news.example/markets",
                }
            ],
        }
        response = NewsApiClient("news-key", http_client=_http(lambda r: httpx.Response(200, json=payload))).search("q")

        assert response.success
        assert response.items[0].publisher == ""
        assert response.items[0].content == "Stocks rose sharply on Monday."

    def test_firecrawl_non_dict_metadata_is_ignored(self):
        payload = {
            "success": True,
            "data": [{"url": "https://a.example/1", "markdown": "Body text", "metadata": "not an object"}],
        }
        response = FirecrawlSearchClient("fc-key", http_client=_http(lambda r: httpx.Response(200, json=payload))).search("q")

        assert response.success
        assert response.items[0].title == "https://a.example/1"

    @pytest.mark.parametrize(
        "client_cls,payload",
        [
            (FirecrawlSearchClient, {"success": True, "data": 42}),
            (NewsApiClient, {"status": "ok", "articles": 7}),
            (TavilySearchClient, {"results": 3.5}),
        ],
    )
    def test_unexpected_shape_is_provider_error(self, client_cls, payload):
        client = client_cls("key", http_client=_http(lambda r: httpx.Response(200, json=payload)))
        response = client.search("q")

        assert response.success is False
        assert response.error == "unexpected payload shape"
        assert response.error_code == "provider_error"
        assert response.status_code == 200

    def test_top_level_list_is_provider_error(self):
        client = TavilySearchClient("tv-key", http_client=_http(lambda r: httpx.Response(200, json=[1, 2])))
        response = client.search("q")

        assert response.success is False
        assert response.error == "unexpected payload shape"

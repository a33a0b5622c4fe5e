"""Factory for creating the configured search backend."""

import httpx

from config.config import Config, FallbackProviderType
from utils.logger import get_logger

from .base_client import BaseSearchClient
from .firecrawl_client import FirecrawlSearchClient
from .newsapi_client import NewsApiClient
from .tavily_client import TavilySearchClient

logger = get_logger(__name__)


def create_search_client(config: Config, http_client: httpx.Client | None = None) -> BaseSearchClient | None:
    """
    Create the search backend named by FALLBACK_PROVIDER.

    Environment variables (via Config):
        FALLBACK_PROVIDER: firecrawl | newsapi | tavily | model_news
        FIRECRAWL_API_KEY / NEWSAPI_KEY / TAVILY_API_KEY
        SEARCH_TIMEOUT_SECONDS

    Returns:
        A search client, or None when the fallback is model-backed. The client
        is created even without a key; the provider reports the missing
        credential in-band.
    """
    provider = config.fallback_provider
    timeout = config.SEARCH_TIMEOUT_SECONDS

    if provider == FallbackProviderType.MODEL_NEWS:
        return None

    if provider == FallbackProviderType.NEWSAPI:
        client = NewsApiClient(config.NEWSAPI_KEY, timeout=timeout, http_client=http_client)
    elif provider == FallbackProviderType.TAVILY:
        client = TavilySearchClient(config.TAVILY_API_KEY, timeout=timeout, http_client=http_client)
    else:
        client = FirecrawlSearchClient(config.FIRECRAWL_API_KEY, timeout=timeout, http_client=http_client)

    logger.info(f"Using {client.display_name} for real-time fallback")
    return client

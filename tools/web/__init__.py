"""Real-time search backends for the fallback provider."""

from .base_client import BaseSearchClient
from .contracts import SearchItem, SearchResponse
from .factory import create_search_client

__all__ = ["BaseSearchClient", "SearchItem", "SearchResponse", "create_search_client"]

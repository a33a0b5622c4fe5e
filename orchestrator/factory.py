"""Wires a Resolver from configuration."""

import httpx

from api.model_provider import NEWS_TEMPLATE, ChatModelProvider
from api.openrouter_client import OpenRouterClient
from api.search_provider import WebSearchProvider
from config.config import Config
from models import messages
from orchestrator.condenser import Condenser
from orchestrator.core import Resolver
from orchestrator.query_router import QueryRouter
from orchestrator.summarizer import ModelSummarizer
from orchestrator.summarizer_context import SummarizerContext
from tools.web import create_search_client
from utils.logger import get_logger

logger = get_logger(__name__)


def create_chat_client(config: Config, model_name: str, http_client: httpx.Client | None = None) -> OpenRouterClient | None:
    if not config.OPENROUTER_API_KEY:
        return None
    return OpenRouterClient(
        api_key=config.OPENROUTER_API_KEY,
        model_name=model_name,
        base_url=config.OPENROUTER_BASE_URL,
        timeout=config.REQUEST_TIMEOUT_SECONDS,
        http_client=http_client,
    )


def create_summarizer_context(config: Config, http_client: httpx.Client | None = None) -> SummarizerContext:
    """The backend is only built on first use."""
    if not config.SUMMARIZER_ENABLED:
        return SummarizerContext(factory=None)

    def build() -> ModelSummarizer | None:
        client = create_chat_client(config, config.SUMMARIZER_MODEL, http_client)
        if client is None:
            return None
        return ModelSummarizer(client)

    return SummarizerContext(factory=build)


def create_resolver(
    config: Config | None = None,
    *,
    summarizer_context: SummarizerContext | None = None,
    http_client: httpx.Client | None = None,
) -> Resolver:
    """
    Build a Resolver from configuration.

    Missing credentials do not fail here; the affected provider answers
    with a configuration message at request time.
    """
    config = config or Config()

    primary = ChatModelProvider(
        create_chat_client(config, config.PRIMARY_MODEL, http_client),
        name="openrouter",
        display_name="OpenRouter",
        source_name=config.PRIMARY_ATTRIBUTION,
    )

    search_client = create_search_client(config, http_client=http_client)
    if search_client is None:
        fallback = ChatModelProvider(
            create_chat_client(config, config.PRIMARY_MODEL, http_client),
            template=NEWS_TEMPLATE,
            name="model_news",
            display_name="OpenRouter",
            source_name="DeepSeek News",
            failure_message=messages.no_recent_news,
        )
    else:
        fallback = WebSearchProvider(
            search_client,
            max_results=config.FALLBACK_MAX_RESULTS,
            min_item_chars=config.FALLBACK_MIN_ITEM_CHARS,
        )

    missing = config.missing_credentials()
    if missing:
        logger.warning(
            "Missing credentials; affected providers will answer with configuration errors",
            extra={"extra_fields": {"missing": missing}},
        )

    return Resolver(
        primary,
        fallback,
        condenser=Condenser(summarizer_context or create_summarizer_context(config, http_client)),
        router=QueryRouter(config.routing_policy),
    )

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv


class FallbackProviderType(Enum):
    """Real-time backends the resolver can fall back to."""
    FIRECRAWL = "firecrawl"
    NEWSAPI = "newsapi"
    TAVILY = "tavily"
    MODEL_NEWS = "model_news"


class RoutingPolicy(Enum):
    """Which source the resolver asks first."""
    PRIMARY_FIRST = "primary_first"
    CUE_BASED = "cue_based"


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


class Config:
    """Configuration management for the application."""

    def __init__(self, load_env_file: bool = True):
        """
        Initialize configuration with environment variables.

        Args:
            load_env_file: Read the project .env file first (disabled in tests)
        """
        if load_env_file:
            env_path = Path(__file__).parent.parent / '.env'
            if env_path.exists():
                load_dotenv(dotenv_path=env_path)

        # Primary provider (OpenAI-compatible chat completions)
        self.OPENROUTER_API_KEY = _env_str('OPENROUTER_API_KEY')
        self.OPENROUTER_BASE_URL = _env_str('OPENROUTER_BASE_URL', 'https://openrouter.ai/api/v1')
        self.PRIMARY_MODEL = _env_str('PRIMARY_MODEL', 'deepseek/deepseek-r1')
        self.PRIMARY_ATTRIBUTION = _env_str('PRIMARY_ATTRIBUTION') or None

        # Summarizer
        self.SUMMARIZER_ENABLED = _env_str('SUMMARIZER_ENABLED', 'true').lower() == 'true'
        self.SUMMARIZER_MODEL = _env_str('SUMMARIZER_MODEL') or self.PRIMARY_MODEL

        # Fallback provider
        self.FALLBACK_PROVIDER = _env_str('FALLBACK_PROVIDER', FallbackProviderType.FIRECRAWL.value).lower()
        self.FIRECRAWL_API_KEY = _env_str('FIRECRAWL_API_KEY')
        self.NEWSAPI_KEY = _env_str('NEWSAPI_KEY')
        self.TAVILY_API_KEY = _env_str('TAVILY_API_KEY')
        self.FALLBACK_MAX_RESULTS = max(1, _env_int('FALLBACK_MAX_RESULTS', 5))
        self.FALLBACK_MIN_ITEM_CHARS = max(0, _env_int('FALLBACK_MIN_ITEM_CHARS', 50))

        # Routing and timeouts
        self.ROUTING_POLICY = _env_str('ROUTING_POLICY', RoutingPolicy.PRIMARY_FIRST.value).lower()
        self.REQUEST_TIMEOUT_SECONDS = _env_float('REQUEST_TIMEOUT_SECONDS', 30.0)
        self.SEARCH_TIMEOUT_SECONDS = _env_float('SEARCH_TIMEOUT_SECONDS', 15.0)

    @property
    def fallback_provider(self) -> FallbackProviderType:
        try:
            return FallbackProviderType(self.FALLBACK_PROVIDER)
        except ValueError:
            return FallbackProviderType.FIRECRAWL

    @property
    def routing_policy(self) -> RoutingPolicy:
        try:
            return RoutingPolicy(self.ROUTING_POLICY)
        except ValueError:
            return RoutingPolicy.PRIMARY_FIRST

    def fallback_credential(self) -> tuple[str, str]:
        """
        Get the (env var name, value) pair the selected fallback needs.

        The model-backed news fallback shares the primary credential.
        """
        provider = self.fallback_provider
        if provider == FallbackProviderType.NEWSAPI:
            return 'NEWSAPI_KEY', self.NEWSAPI_KEY
        if provider == FallbackProviderType.TAVILY:
            return 'TAVILY_API_KEY', self.TAVILY_API_KEY
        if provider == FallbackProviderType.MODEL_NEWS:
            return 'OPENROUTER_API_KEY', self.OPENROUTER_API_KEY
        return 'FIRECRAWL_API_KEY', self.FIRECRAWL_API_KEY

    def missing_credentials(self) -> list[str]:
        """
        List the credentials required by the selected providers that are unset.

        A missing credential never stops the process; the affected provider
        answers with a configuration message instead.
        """
        missing = []
        if not self.OPENROUTER_API_KEY:
            missing.append('OPENROUTER_API_KEY')
        name, value = self.fallback_credential()
        if not value and name not in missing:
            missing.append(name)
        return missing

    def validate(self) -> bool:
        """
        Check that all credentials for the selected providers are present.

        Returns:
            bool: True if configuration is complete, False otherwise
        """
        return not self.missing_credentials()

    def describe(self) -> str:
        """
        Get a one-line summary of the active configuration.

        Returns:
            str: Formatted string with provider information
        """
        return (
            f"Primary: {self.PRIMARY_MODEL} | "
            f"Fallback: {self.fallback_provider.value} | "
            f"Routing: {self.routing_policy.value}"
        )

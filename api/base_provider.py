from abc import ABC, abstractmethod

from models.provider_result import ProviderResult, Source
from utils.logger import get_logger

logger = get_logger(__name__)


class BaseProvider(ABC):
    """
    A source the resolver can ask for content.

    ``fetch`` owns the local guards shared by every provider: an empty query
    or a missing credential is answered in-band without touching the network.
    Subclasses implement ``_fetch`` for a trimmed, non-empty query.
    """

    name = "base"
    display_name = "Base"
    source = Source.NONE
    diagnostic_query = "latest technology news"

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True when the credential this provider needs is present."""

    @abstractmethod
    def _fetch(self, query: str) -> ProviderResult:
        """Fetch content for a clean query. Must not raise."""

    def fetch(self, query: str) -> ProviderResult:
        clean_query = (query or "").strip()
        if not clean_query:
            return ProviderResult.input_error(provider=self.name)

        if not self.is_configured():
            logger.warning(
                f"{self.display_name} credential missing",
                extra={"extra_fields": {"provider": self.name}},
            )
            return ProviderResult.config_error(provider=self.name, display_name=self.display_name)

        return self._fetch(clean_query)

    def check(self) -> ProviderResult:
        """Exercise the provider with a canned query for diagnostics."""
        return self.fetch(self.diagnostic_query)

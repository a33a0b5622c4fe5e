import threading
from typing import Callable

from orchestrator.summarizer import Summarizer
from utils.logger import get_logger

logger = get_logger(__name__)


class SummarizerContext:
    """
    Lazily built, process-wide handle to the model-backed summarizer.

    Owned by the caller and passed to the resolver. The backend is created at
    most once; a failed initialization is remembered and not retried.
    """

    def __init__(self, factory: Callable[[], Summarizer | None] | None):
        """
        Args:
            factory: Builds the summarizer. May return None or raise when the
                backend is unavailable. A None factory disables the context.
        """
        self._factory = factory
        self._summarizer: Summarizer | None = None
        self._initialized = False
        self._error: str | None = None
        self._lock = threading.Lock()

    def init(self) -> bool:
        """Build the backend if that has not been attempted yet. Returns is_ready()."""
        if self._initialized:
            return self.is_ready()

        with self._lock:
            if self._initialized:
                return self.is_ready()

            if self._factory is None:
                self._error = "summarizer disabled"
            else:
                try:
                    self._summarizer = self._factory()
                    if self._summarizer is None:
                        self._error = "summarizer backend not configured"
                except Exception as e:
                    self._summarizer = None
                    self._error = str(e) or type(e).__name__
                    logger.error(
                        "Failed to initialize summarizer backend",
                        exc_info=True,
                        extra={"extra_fields": {"error": self._error}},
                    )

            self._initialized = True
            if self._summarizer is not None:
                logger.info(
                    "Summarizer backend ready",
                    extra={"extra_fields": {"summarizer": self._summarizer.name}},
                )

        return self.is_ready()

    def is_ready(self) -> bool:
        return self._initialized and self._summarizer is not None

    def get(self) -> Summarizer | None:
        self.init()
        return self._summarizer

    @property
    def error(self) -> str | None:
        return self._error

from models.provider_result import ProviderResult
from orchestrator.routing_types import ValidationResult

# Answers shorter than this rarely carry enough substance to speak back.
STALENESS_MIN_CHARS = 150

STALE_MARKERS = (
    "no recent information",
    "outdated",
    "no results found",
    "i don't have access to real-time",
    "i do not have access to real-time",
    "i don't have real-time",
    "try using different keywords",
    "my knowledge cutoff",
    "as of my last update",
    "my training data",
    "no real-time results",
    "no recent news found",
)


def _normalize(content: str) -> str:
    return (content or "").replace("’", "'").replace("‘", "'").lower()


def find_stale_marker(content: str) -> str | None:
    text = _normalize(content)
    for marker in STALE_MARKERS:
        if marker in text:
            return marker
    return None


def is_insufficient(content: str, min_chars: int = STALENESS_MIN_CHARS) -> bool:
    """
    Lexical check for answers that lack current or sufficient information.

    Conservative on purpose: a good answer flagged as stale only costs one
    extra fallback call.
    """
    if len((content or "").strip()) < min_chars:
        return True
    return find_stale_marker(content) is not None


class ResponseValidator:
    """Explains why a provider result needs a second source."""

    def __init__(self, min_chars: int = STALENESS_MIN_CHARS):
        self._min_chars = min_chars

    def validate(self, result: ProviderResult) -> ValidationResult:
        if result.is_error:
            return ValidationResult(ok=False, reason=result.kind.value, severity="high")

        marker = find_stale_marker(result.content)
        if marker:
            return ValidationResult(ok=False, reason="stale_marker", severity="medium", detail=marker)

        if len(result.content.strip()) < self._min_chars:
            return ValidationResult(ok=False, reason="too_short", severity="medium")

        return ValidationResult(ok=True, reason="ok", severity="none")

from dataclasses import dataclass

from orchestrator.summarizer import ExtractiveSummarizer, Summarizer, word_count
from orchestrator.summarizer_context import SummarizerContext
from tools.web.research_pack import to_spoken_text
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_INPUT_CHARS = 1500


@dataclass(frozen=True)
class CondensedText:
    text: str
    strategy: str  # "unchanged" | "model" | "extractive"


class Condenser:
    """
    Reduces retrieved content to a short, speakable summary.

    Tries the model-backed summarizer when the context has one, and falls
    through to the extractive summarizer on any failure. Extractive input has
    search headers and URLs removed first.
    """

    def __init__(self, context: SummarizerContext | None = None, fallback: Summarizer | None = None):
        self.context = context
        self.fallback = fallback or ExtractiveSummarizer()

    def condense(
        self,
        content: str,
        *,
        min_words: int,
        max_words: int,
        input_chars: int = DEFAULT_INPUT_CHARS,
    ) -> CondensedText:
        text = (content or "").strip()[:input_chars]

        if word_count(text) <= min_words:
            return CondensedText(text=text, strategy="unchanged")

        model = self.context.get() if self.context is not None else None
        if model is not None:
            try:
                summary = model.summarize(text, min_words, max_words)
                return CondensedText(text=summary, strategy=model.name)
            except Exception as e:
                logger.warning(
                    "Model summarizer failed, using extractive fallback",
                    extra={"extra_fields": {"error": str(e), "error_type": type(e).__name__}},
                )

        return CondensedText(
            text=self.fallback.summarize(to_spoken_text(text), min_words, max_words),
            strategy=self.fallback.name,
        )

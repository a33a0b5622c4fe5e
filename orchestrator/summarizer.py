"""
Summarization strategies.

Two interchangeable implementations of ``Summarizer``:

- ``ModelSummarizer`` asks a chat model for a summary within a word range.
- ``ExtractiveSummarizer`` keeps leading sentences under a character budget.
  It needs no network and never fails, so it is always the last resort.
"""

import re
from abc import ABC, abstractmethod

from api.base_client import BaseAIClient
from utils.logger import get_logger

logger = get_logger(__name__)

# Average characters per English word, including the trailing space.
CHARS_PER_WORD = 6

ELLIPSIS = "..."

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
_TERMINAL_PUNCTUATION = (".", "!", "?")

SUMMARY_PROMPT = (
    "Summarize the following content for a spoken answer.\n"
    "Use between {min_words} and {max_words} words. Reply with the summary only, "
    "in plain sentences, with no headings, lists, links or citations.\n\n"
    "Content:\n{content}"
)


class SummarizationError(Exception):
    """A summarizer could not produce a summary."""


def word_count(text: str) -> int:
    return len((text or "").split())


class Summarizer(ABC):
    name = "summarizer"

    @abstractmethod
    def summarize(self, text: str, min_words: int, max_words: int) -> str:
        """
        Summarize ``text`` to roughly ``min_words``..``max_words`` words.

        Raises:
            SummarizationError: if no summary could be produced
        """


class ModelSummarizer(Summarizer):
    name = "model"

    def __init__(self, client: BaseAIClient, *, temperature: float = 0.2, max_tokens: int = 400):
        self.client = client
        self.temperature = temperature
        self.max_tokens = max_tokens

    def summarize(self, text: str, min_words: int, max_words: int) -> str:
        prompt = SUMMARY_PROMPT.format(min_words=min_words, max_words=max_words, content=text)
        response = self.client.get_completion(
            prompt, temperature=self.temperature, max_tokens=self.max_tokens
        )
        if response.is_error:
            raise SummarizationError(f"{response.error.code}: {response.error.message}")

        summary = " ".join((response.text or "").split())
        if not summary:
            raise SummarizationError("empty summary")
        return summary


class ExtractiveSummarizer(Summarizer):
    name = "extractive"

    def summarize(self, text: str, min_words: int, max_words: int) -> str:
        content = " ".join((text or "").split())
        if not content:
            return ""

        budget = max(max_words * CHARS_PER_WORD, len(ELLIPSIS) + 1)
        if len(content) <= budget:
            return _ensure_terminal(content)

        summary = ""
        for sentence in _SENTENCE_SPLIT.split(content):
            candidate = f"{summary} {sentence}".strip()
            if len(candidate) > budget:
                break
            summary = candidate

        if not summary:
            return content[: budget - len(ELLIPSIS)].rstrip() + ELLIPSIS

        return _ensure_terminal(summary)


def _ensure_terminal(text: str) -> str:
    if text.endswith(_TERMINAL_PUNCTUATION) or text.endswith(ELLIPSIS):
        return text
    return text.rstrip(",;:-") + "."

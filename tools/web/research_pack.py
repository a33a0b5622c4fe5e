"""Filter search items and combine them into one attributed text blob."""

import re

from .contracts import SearchItem

MAX_ITEM_CHARS = 1000

_HEADER_LINE = re.compile(r"^\[\d+\]\s+(.+?)(?:\s+\([^()]*\))?$")
_MARKDOWN_LINK = re.compile(r"\[([^\]]*)\]\((?:https?://)?[^)\s]*\)")
_BARE_URL = re.compile(r"(?:https?://|www\.)\S+")
_TERMINAL = (".", "!", "?")


def _trim_text(text: str, limit: int = MAX_ITEM_CHARS) -> str:
    raw = (text or "").strip()
    if len(raw) <= limit:
        return raw
    return raw[: limit - 3].rstrip() + "..."


def select_items(items: list[SearchItem], *, max_results: int, min_chars: int) -> list[SearchItem]:
    """
    Keep the top ``max_results`` items whose content is at least ``min_chars`` long.

    Near-empty snippets are dropped before the cut so that they do not take
    a slot from a usable result further down.
    """
    usable = [item for item in items if len(item.content.strip()) >= min_chars]
    return usable[:max_results]


def build_combined_content(items: list[SearchItem], *, item_limit: int = MAX_ITEM_CHARS) -> str:
    """
    Combine items into one blob, each block prefixed with its title and URL.

    Example block::

        [1] Example headline
        URL: https://example.com/story
        Body text...
    """
    blocks = []
    for idx, item in enumerate(items, start=1):
        header = f"[{idx}] {item.title}"
        if item.publisher:
            header += f" ({item.publisher})"
        blocks.append(f"{header}\nURL: {item.url}\n{_trim_text(item.content, limit=item_limit)}")
    return "\n\n".join(blocks)


def to_spoken_text(blob: str) -> str:
    """
    Turn a combined search blob into text that can be read aloud.

    ``URL:`` lines are dropped and ``[n] Title (publisher)`` headers become the
    bare title as its own sentence. Links inside item bodies keep only their
    anchor text.
    """
    lines = []
    for line in (blob or "").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("URL:"):
            continue
        header = _HEADER_LINE.match(stripped)
        if header:
            title = " ".join(_BARE_URL.sub("", header.group(1)).split())
            if not title:
                continue
            if not title.endswith(_TERMINAL):
                title += "."
            lines.append(title)
            continue
        text = _BARE_URL.sub("", _MARKDOWN_LINK.sub(r"\1", stripped))
        text = " ".join(text.split())
        if text:
            lines.append(text)
    return "\n".join(lines)

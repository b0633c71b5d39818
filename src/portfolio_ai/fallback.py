"""Local result extraction used when the provider gives nothing usable.

Also holds the localized default strings shared with the parser.
"""

import re

from portfolio_ai.entities import ImproveResultEntity, NormalizedInput
from portfolio_ai.normalizer import clean_text

MAX_HIGHLIGHTS = 3
MIN_HIGHLIGHT_LENGTH = 8

_SENTENCE_SPLIT_RE = re.compile(r"[\n.!?;]+")

_SUMMARIES = {
    "ru": {
        False: "Описание улучшено и структурировано.",
        True: "Достигнут лимит AI (429). Применена локальная обработка текста.",
    },
    "en": {
        False: "Description was improved and structured.",
        True: "AI rate limit reached (429). Local text processing was applied.",
    },
}


def _locale(language: str) -> str:
    return "ru" if language.lower() == "ru" else "en"


def default_summary(language: str, rate_limited: bool = False) -> str:
    """Localized summary used when none is available."""
    return _SUMMARIES[_locale(language)][rate_limited]


def placeholder_highlight(language: str, index: int) -> str:
    """Localized placeholder for a missing highlight (1-based index)."""
    if _locale(language) == "ru":
        return f"Ключевой пункт {index}"
    return f"Key point {index}"


def pad_highlights(highlights: list[str], language: str) -> tuple[str, str, str]:
    """Truncate or pad a highlight list to exactly three items."""
    items = list(highlights[:MAX_HIGHLIGHTS])
    while len(items) < MAX_HIGHLIGHTS:
        items.append(placeholder_highlight(language, len(items) + 1))
    return items[0], items[1], items[2]


def extract_highlights(text: str, language: str) -> tuple[str, str, str]:
    """Pick the first sentence-like fragments of at least 8 characters."""
    highlights: list[str] = []
    for part in _SENTENCE_SPLIT_RE.split(text):
        fragment = clean_text(part)
        if len(fragment) < MIN_HIGHLIGHT_LENGTH:
            continue
        highlights.append(fragment)
        if len(highlights) == MAX_HIGHLIGHTS:
            break
    return pad_highlights(highlights, language)


def build_fallback(normalized: NormalizedInput, rate_limited: bool) -> ImproveResultEntity:
    """Derive a result from the source text without calling the provider.

    Args:
        normalized: The normalized request
        rate_limited: Selects the rate-limit summary variant

    Returns:
        ImproveResultEntity built from the cleaned source text
    """
    improved_text = clean_text(normalized.text)
    return ImproveResultEntity(
        improved_text=improved_text,
        summary=default_summary(normalized.language, rate_limited),
        highlights=extract_highlights(improved_text, normalized.language),
    )

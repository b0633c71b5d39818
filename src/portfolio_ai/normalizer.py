"""Request normalization and text canonicalization.

Everything here is pure: no I/O and no failure modes. Absent or blank
fields normalize to defaults instead of raising.
"""

import re

from portfolio_ai.entities import Domain, ImproveRequestEntity, NormalizedInput

MAX_TEXT_LENGTH = 5000
MAX_CONTEXT_LENGTH = 1200
NO_CONTEXT = "none"

# ASCII unit separator, never part of user-facing text
CACHE_KEY_SEPARATOR = "\x1f"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_language(language: str | None) -> str:
    """Map a language tag to "ru", "en" or "auto"."""
    value = (language or "").lower()
    if value in ("ru", "en"):
        return value
    return "auto"


def normalize_text(text: str | None) -> str:
    """Trim and cut the source text to MAX_TEXT_LENGTH characters."""
    return (text or "").strip()[:MAX_TEXT_LENGTH]


def normalize_context(context: str | None) -> str:
    """Trim and cut the context, defaulting to "none" when blank."""
    value = (context or "").strip()
    if not value:
        return NO_CONTEXT
    return value[:MAX_CONTEXT_LENGTH]


def normalize(request: ImproveRequestEntity) -> NormalizedInput:
    """Build the canonical form of a request.

    Args:
        request: The raw request

    Returns:
        NormalizedInput usable for prompting and cache lookups

    Example:
        ```python
        normalize(ImproveRequestEntity(text="  hi ", language="EN"))
        # NormalizedInput(text="hi", context="none", language="en")
        ```
    """
    return NormalizedInput(
        text=normalize_text(request.text),
        context=normalize_context(request.context),
        language=normalize_language(request.language),
    )


def build_cache_key(domain: Domain, normalized: NormalizedInput) -> str:
    """Fingerprint of a normalized request.

    Requests are cache-equivalent iff domain, language, context and text
    are all identical.
    """
    return CACHE_KEY_SEPARATOR.join(
        (domain.value, normalized.language, normalized.context, normalized.text)
    )


def clean_text(text: str | None) -> str:
    """Collapse whitespace runs to single spaces, trim, capitalize the first letter."""
    if not text:
        return ""
    value = _WHITESPACE_RE.sub(" ", text).strip()
    if not value:
        return ""
    return value[0].upper() + value[1:]

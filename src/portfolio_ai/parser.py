"""Decoding of provider content into an improvement result."""

import json
from typing import Any

from portfolio_ai.entities import ImproveResultEntity, NormalizedInput
from portfolio_ai.errors import MalformedResponseError
from portfolio_ai.fallback import MAX_HIGHLIGHTS, default_summary, pad_highlights
from portfolio_ai.normalizer import clean_text


def _scalar_text(value: Any) -> str:
    """Text of a JSON scalar; objects, arrays and null give an empty string."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        # json.dumps keeps JSON spelling: true, 42, 40.5
        return json.dumps(value)
    return ""


def _text_field(data: dict[str, Any], *names: str) -> str:
    """Return the first non-blank scalar value among the given keys."""
    for name in names:
        value = _scalar_text(data.get(name))
        if value.strip():
            return value
    return ""


def _collect_highlights(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []

    highlights: list[str] = []
    for item in value:
        text = clean_text(_scalar_text(item))
        if text:
            highlights.append(text)
        if len(highlights) == MAX_HIGHLIGHTS:
            break
    return highlights


def parse_completion(content: str, normalized: NormalizedInput) -> ImproveResultEntity:
    """Decode the provider's JSON content.

    Business logic:
    1. Decode the content as a JSON object
    2. Fill empty fields from the source text or localized defaults
    3. Bound highlights to exactly three items
    4. Canonicalize every string

    Args:
        content: Message content returned by the provider
        normalized: The normalized request, for defaults

    Returns:
        ImproveResultEntity

    Raises:
        MalformedResponseError: If the content is not a JSON object
    """
    try:
        data = json.loads(content)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Provider content is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Provider content must be a JSON object, got {type(data).__name__}"
        )

    improved_text = _text_field(data, "improvedText", "improved_text") or normalized.text
    summary = _text_field(data, "summary") or default_summary(normalized.language)

    return ImproveResultEntity(
        improved_text=clean_text(improved_text),
        summary=clean_text(summary),
        highlights=pad_highlights(_collect_highlights(data.get("highlights")), normalized.language),
    )

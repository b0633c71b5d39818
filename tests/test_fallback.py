"""
Tests for local fallback extraction.
"""

from portfolio_ai.entities import NormalizedInput
from portfolio_ai.fallback import build_fallback, extract_highlights


def _input(text: str, language: str = "en") -> NormalizedInput:
    return NormalizedInput(text=text, context="none", language=language)


def test_sentences_become_highlights_in_order():
    result = build_fallback(
        _input("Led backend migration. Reduced latency by 40%. Mentored two juniors."),
        rate_limited=False,
    )
    assert result.highlights == (
        "Led backend migration",
        "Reduced latency by 40%",
        "Mentored two juniors",
    )


def test_short_fragments_skipped_and_shortfall_padded():
    highlights = extract_highlights("Go! Rust; Built a payments service\nok", "en")
    assert highlights == ("Built a payments service", "Key point 2", "Key point 3")


def test_only_first_three_fragments_kept():
    text = "First sentence here. Second sentence here! Third sentence here? Fourth sentence here."
    assert extract_highlights(text, "en") == (
        "First sentence here",
        "Second sentence here",
        "Third sentence here",
    )


def test_improved_text_is_cleaned_source():
    result = build_fallback(_input("built   a\ntool"), rate_limited=False)
    assert result.improved_text == "Built a tool"


def test_rate_limited_summary_variant():
    en = build_fallback(_input("text"), rate_limited=True)
    ru = build_fallback(_input("текст", language="ru"), rate_limited=True)
    assert en.summary == "AI rate limit reached (429). Local text processing was applied."
    assert ru.summary == "Достигнут лимит AI (429). Применена локальная обработка текста."


def test_generic_summary_variant():
    result = build_fallback(_input("text", language="auto"), rate_limited=False)
    assert result.summary == "Description was improved and structured."


def test_empty_text_yields_placeholders():
    result = build_fallback(_input("", language="ru"), rate_limited=False)
    assert result.improved_text == ""
    assert result.highlights == ("Ключевой пункт 1", "Ключевой пункт 2", "Ключевой пункт 3")

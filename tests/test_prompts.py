"""
Tests for prompt rendering.
"""

from portfolio_ai.entities import Domain, NormalizedInput
from portfolio_ai.prompts import build_prompts, build_system_prompt


def test_system_prompt_names_domain_and_contract():
    prompt = build_system_prompt(Domain.PROJECT)
    assert "Task domain: PROJECT" in prompt
    for key in ("improvedText", "summary", "highlights"):
        assert key in prompt
    assert "Do not invent" in prompt
    assert "No markdown" in prompt


def test_user_prompt_embeds_all_fields():
    normalized = NormalizedInput(text="Built a CLI.", context="backend role", language="en")
    prompts = build_prompts(Domain.CERTIFICATE, normalized)
    assert prompts.user == (
        "DOMAIN: CERTIFICATE\n"
        "LANGUAGE: en\n"
        "CONTEXT: backend role\n"
        "SOURCE_TEXT:\n"
        "Built a CLI.\n"
    )


def test_prompts_are_deterministic():
    normalized = NormalizedInput(text="Same", context="none", language="auto")
    assert build_prompts(Domain.CV, normalized) == build_prompts(Domain.CV, normalized)
    assert build_prompts(Domain.CV, normalized) != build_prompts(Domain.PROJECT, normalized)

"""Prompt templates for the improvement call."""

from portfolio_ai.entities import Domain, NormalizedInput, PromptPair

SYSTEM_PROMPT_TEMPLATE = """You are a senior portfolio writing assistant.

Task domain: {domain}
Return STRICT JSON object with keys:
- improvedText: string
- summary: string
- highlights: string[] (3 items)

Rules:
1) Keep the original facts. Do not invent companies, awards, dates, metrics or technologies.
2) Rewrite text to be clear, professional and result-oriented.
3) Keep language requested by user (ru or en). If not provided, use source text language.
4) No markdown, no code blocks, no extra keys.
"""

USER_PROMPT_TEMPLATE = """DOMAIN: {domain}
LANGUAGE: {language}
CONTEXT: {context}
SOURCE_TEXT:
{text}
"""


def build_system_prompt(domain: Domain) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(domain=domain.value)


def build_user_prompt(domain: Domain, normalized: NormalizedInput) -> str:
    return USER_PROMPT_TEMPLATE.format(
        domain=domain.value,
        language=normalized.language,
        context=normalized.context,
        text=normalized.text,
    )


def build_prompts(domain: Domain, normalized: NormalizedInput) -> PromptPair:
    """Render both messages for a request; deterministic for equal inputs."""
    return PromptPair(
        system=build_system_prompt(domain),
        user=build_user_prompt(domain, normalized),
    )

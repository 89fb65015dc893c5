"""Prompt templates for sales pitch script generation.

Workflow order:
1. script  - Gemini writes the pitch script (SCRIPT_SYSTEM_PROMPT + build_prompt)
2. preview - ElevenLabs fast model reads the script (no prompt)
3. hq      - ElevenLabs high quality model reads the script (no prompt)
"""

from ..constants import (
    ANSWER_KEYS,
    DEFAULT_PITCH_CHARS,
    PITCH_LENGTH_CHARS,
    TTS_HQ_PRICE_PER_CHAR,
    TTS_PREVIEW_PRICE_PER_CHAR,
)
from .exceptions import IncompleteAnswers

# =============================================================================
# 1. SCRIPT: system prompt
# =============================================================================

SCRIPT_SYSTEM_PROMPT = """You are an expert sales copywriter. Generate compelling, conversational sales scripts that sound natural when read aloud.

CRITICAL RULES:
1) NEVER use placeholders like [first name], [your name], [company].
2) Write the script as if you're speaking directly to someone - no blanks to fill in.
3) Never include headers, formatting, or meta-commentary.
4) Output ONLY the final script text, ready to be read aloud exactly as-is."""

# =============================================================================
# 1-1. SCRIPT: user prompt built from the wizard answers
# =============================================================================

PITCH_PROMPT_TEMPLATE = """Write a {pitchLength} cold call / elevator pitch / LinkedIn DM using this info.

Style: Casual, like a phone call to a friend. Contractions, filler phrases ("So look," "Here's the thing"), rhetorical questions, short punchy sentences. No bullet points. Human, not scripted.

Goal: get the listener to take the ask below.

---
WHO: {who}
PAIN: {pain}
CURRENT FIX & WHY IT SUCKS: {currentFix}
WHAT WE DO: {whatYouDo}
HOW IT WORKS: {howItWorks}
WHY US: {whyYou}
THE ASK: {theAsk}
---

Return ONLY the script text, ready to be read aloud. No headers, no formatting, no intro text."""


def find_missing_answers(answers: dict | None) -> list[str]:
    """Return required answer keys that are absent or blank, in prompt order."""
    answers = answers or {}
    missing = []
    for key in ANSWER_KEYS:
        value = answers.get(key)
        if value is None or not str(value).strip():
            missing.append(key)
    return missing


def normalize_answers(answers: dict) -> dict[str, str]:
    """Return the 8 answers in prompt order with surrounding whitespace removed.

    Raises:
        IncompleteAnswers: If any required key is missing or blank
    """
    missing = find_missing_answers(answers)
    if missing:
        raise IncompleteAnswers(missing)
    return {key: str(answers[key]).strip() for key in ANSWER_KEYS}


def build_prompt(answers: dict) -> str:
    """Build the script prompt from the wizard answers.

    Each answer is substituted exactly once, in ANSWER_KEYS order.

    Args:
        answers: Mapping of answer key to free text

    Returns:
        Prompt text for the script model

    Raises:
        IncompleteAnswers: If any required key is missing or blank
    """
    return PITCH_PROMPT_TEMPLATE.format(**normalize_answers(answers))


def estimate_cost(pitch_length: str) -> dict:
    """Estimate TTS cost (USD) for a pitch length selection."""
    chars = PITCH_LENGTH_CHARS.get(pitch_length, DEFAULT_PITCH_CHARS)
    return {
        "chars": chars,
        "preview": round(chars * TTS_PREVIEW_PRICE_PER_CHAR, 2),
        "hq": round(chars * TTS_HQ_PRICE_PER_CHAR, 2),
    }

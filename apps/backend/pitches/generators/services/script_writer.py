"""Gemini client for sales pitch script writing."""

import requests
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import BaseModel, Field

from ...constants import TIMEOUT_KEYWORDS
from ..config import (
    GEMINI_API_KEY,
    SCRIPT_MAX_OUTPUT_TOKENS,
    SCRIPT_MODEL,
    SCRIPT_TEMPERATURE,
    SCRIPT_TIMEOUT_SEC,
)
from ..exceptions import (
    UpstreamError,
    UpstreamInvalidResponse,
    UpstreamRejected,
    UpstreamTimeout,
)
from ..prompts import SCRIPT_SYSTEM_PROMPT
from ..utils.logging import log, log_prompt, log_separator


class ScriptResult(BaseModel):
    """Script text returned by the model with token usage."""

    text: str = Field(description="Script ready to be read aloud")
    model: str = Field(description="Model that produced the script")
    input_tokens: int = Field(default=0, description="Prompt tokens billed")
    output_tokens: int = Field(default=0, description="Completion tokens billed")


_llm: ChatGoogleGenerativeAI | None = None


def get_script_llm() -> ChatGoogleGenerativeAI:
    """Get or create the LangChain Gemini chat model.

    Retries are disabled: every provider call is billed, and a retry is
    always an explicit user action.
    """
    global _llm
    if _llm is None:
        if not GEMINI_API_KEY:
            raise UpstreamRejected("GEMINI_API_KEY is not configured")
        _llm = ChatGoogleGenerativeAI(
            model=SCRIPT_MODEL,
            google_api_key=GEMINI_API_KEY,
            temperature=SCRIPT_TEMPERATURE,
            max_output_tokens=SCRIPT_MAX_OUTPUT_TOKENS,
            timeout=SCRIPT_TIMEOUT_SEC,
            max_retries=0,
        )
    return _llm


def classify_error(exception: Exception) -> UpstreamError:
    """Map a provider exception to the upstream error taxonomy."""
    if isinstance(exception, UpstreamError):
        return exception

    message = str(exception) or exception.__class__.__name__
    if isinstance(exception, (TimeoutError, requests.Timeout)):
        return UpstreamTimeout(message)
    if any(keyword in message.lower() for keyword in TIMEOUT_KEYWORDS):
        return UpstreamTimeout(message)
    return UpstreamRejected(message)


def _extract_text(content) -> str:
    """Return the text of a chat response.

    Gemini answers either with a plain string or with a list of content
    parts (strings or ``{"type": "text", "text": ...}`` blocks).
    """
    if isinstance(content, str):
        return content.strip()

    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
            else:
                raise UpstreamInvalidResponse(f"Unexpected content part: {part!r}")
        return "".join(parts).strip()

    raise UpstreamInvalidResponse(f"Unexpected response content: {type(content).__name__}")


def write_script(prompt: str) -> ScriptResult:
    """Generate a pitch script for the given prompt.

    Makes exactly one model call.

    Args:
        prompt: Prompt built from the wizard answers

    Returns:
        ScriptResult with the script text and token usage

    Raises:
        UpstreamTimeout: The call timed out
        UpstreamRejected: The provider refused the request
        UpstreamInvalidResponse: The provider returned no usable script
    """
    log_separator("Gemini script request")
    log(f"Model: {SCRIPT_MODEL}")
    log_prompt(prompt, "Pitch prompt")

    messages = [
        SystemMessage(content=SCRIPT_SYSTEM_PROMPT),
        HumanMessage(content=prompt),
    ]

    try:
        response = get_script_llm().invoke(messages)
    except Exception as e:
        error = classify_error(e)
        log(f"Script request failed ({error.category}): {e}", "ERROR")
        raise error from e

    text = _extract_text(response.content)
    if not text:
        log("Script request returned empty text", "ERROR")
        raise UpstreamInvalidResponse("No script generated")

    usage = getattr(response, "usage_metadata", None) or {}
    result = ScriptResult(
        text=text,
        model=SCRIPT_MODEL,
        input_tokens=usage.get("input_tokens", 0) or 0,
        output_tokens=usage.get("output_tokens", 0) or 0,
    )
    log(
        f"Script generated: {len(text)} chars "
        f"({result.input_tokens} in / {result.output_tokens} out tokens)",
        "SUCCESS",
    )
    return result

"""
Tool: LLM Client
Purpose: Send prompts to the model and pull JSON out of free-form replies

Usage:
    from mailhub.assistant.llm import LLMClient, extract_json

    llm = LLMClient()
    text = await llm.generate_text(system="You are...", prompt="Summarize...")
    data = extract_json(text, dict)

Dependencies:
    - anthropic (pip install anthropic); ANTHROPIC_API_KEY in the environment
"""

import json
import logging
import re
from typing import Any

import anthropic

from mailhub.config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TEMPERATURE, get_section


logger = logging.getLogger(__name__)

_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


def extract_json(text: str | None, kind: type = dict) -> Any:
    """
    Parse the outermost JSON object (or array) embedded in model output.

    Takes everything from the first opener to the last closer, so code
    fences and leading prose are ignored.

    Args:
        text: Raw model output
        kind: dict or list, the expected top-level type

    Returns:
        The decoded value, or None when nothing of the right type parses
    """
    if not text:
        return None

    pattern = _ARRAY_RE if kind is list else _OBJECT_RE
    match = pattern.search(text)
    if not match:
        return None

    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.debug(f"Model output was not valid JSON: {text[:200]}")
        return None

    return value if isinstance(value, kind) else None


class LLMClient:
    """Async wrapper over the Anthropic Messages API."""

    def __init__(
        self,
        client: anthropic.AsyncAnthropic | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ):
        settings = get_section("assistant")
        self.client = client or anthropic.AsyncAnthropic()
        self.model = model or settings.get("model", DEFAULT_MODEL)
        self.max_tokens = max_tokens or settings.get("max_tokens", DEFAULT_MAX_TOKENS)
        self.temperature = temperature if temperature is not None else settings.get(
            "temperature", DEFAULT_TEMPERATURE
        )

    async def generate_text(self, system: str, prompt: str) -> str:
        """
        Run one system+user exchange and return the concatenated text.

        API errors propagate; callers at the route boundary turn them into 500s.
        """
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )
        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        return text.strip()

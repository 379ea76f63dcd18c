"""
Highlights Service

Asks an OpenAI-compatible chat model (Perplexity by default) for up to three
short highlights about a recipe. Highlights are decoration: every failure
is logged and degrades to an empty list.
"""

import json
import logging
import re
from typing import Any, List, Optional

from openai import AsyncOpenAI

from ..core.config import settings

logger = logging.getLogger(__name__)

MAX_HIGHLIGHTS = 3

PROMPT = (
    "Given the following recipe description, generate up to three short highlights about the recipe. "
    "Some ideas include: high in protein, easy to prepare, X number of ingredients, vegan, gluten-free, etc. "
    "Return the highlights as a JSON array of strings. Return in plain text. Do not use a code block.\n\n"
    "Description:\n{description}"
)


def parse_highlights(raw: Optional[str]) -> List[str]:
    """
    Parse a model reply into a list of highlight strings.

    Tolerates markdown code fences and text around the array. Returns an
    empty list if no JSON array can be found.
    """
    if not raw:
        return []

    content = raw.strip()
    if "```" in content:
        match = re.search(r"```(?:json)?\n?(.*?)\n?```", content, re.DOTALL)
        if match:
            content = match.group(1).strip()

    parsed: Any = None
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        start_idx = content.find("[")
        end_idx = content.rfind("]")
        if start_idx != -1 and end_idx > start_idx:
            try:
                parsed = json.loads(content[start_idx : end_idx + 1])
            except json.JSONDecodeError:
                parsed = None

    if not isinstance(parsed, list):
        logger.warning("Highlights reply is not a JSON array: %r", raw)
        return []

    return [item.strip() for item in parsed if isinstance(item, str) and item.strip()][:MAX_HIGHLIGHTS]


class HighlightsService:
    """Generates recipe highlights with a chat-completions model."""

    async def generate(self, description: str) -> List[str]:
        """
        Generate highlights for a plain-text recipe description.

        Returns:
            Up to three highlight strings, or [] when unconfigured or on error
        """
        if not settings.highlights_enabled or not settings.perplexity_api_key:
            return []
        if not description or not description.strip():
            return []

        try:
            async with AsyncOpenAI(
                api_key=settings.perplexity_api_key,
                base_url=settings.highlights_model_url,
            ) as client:
                completion = await client.chat.completions.create(
                    model=settings.highlights_model_name,
                    messages=[{"role": "user", "content": PROMPT.format(description=description)}],
                    max_tokens=100,
                    temperature=0.5,
                )
        except Exception:
            logger.exception("Highlights request failed")
            return []

        if not completion.choices:
            logger.warning("Highlights model returned no choices")
            return []

        return parse_highlights(completion.choices[0].message.content)


# Singleton instance for easy import
highlights_service = HighlightsService()

from typing import NamedTuple
import logging

import google.generativeai as genai

from wecare.core.config import settings
from wecare.core.exceptions import UpstreamError, handle_upstream_error

logger = logging.getLogger(__name__)

# Configure Gemini
if settings.GEMINI_API_KEY:
    genai.configure(api_key=settings.GEMINI_API_KEY)

PLACEHOLDER_RESPONSE = """[AI Response Placeholder - Please select an AI integration to enable this feature]

Based on your symptoms: "{symptoms}"

This is where the AI would provide:
- Medical recommendations
- Safety warnings
- When to seek professional help
- Relevant health advice

Please select an AI integration (ChatGPT, Claude, or Gemini) to enable real AI-powered medical consultations."""

DEGRADED_CONFIDENCE = 0.0


class AIResult(NamedTuple):
    text: str
    confidence: float


def placeholder_response(symptoms: str) -> str:
    return PLACEHOLDER_RESPONSE.format(symptoms=symptoms)


async def generate_content(prompt: str) -> str:
    """
    Generates content using Gemini model.
    """
    try:
        model = genai.GenerativeModel(settings.GEMINI_MODEL)
        response = await model.generate_content_async(prompt)
        return response.text
    except Exception as e:
        raise handle_upstream_error(e, "gemini", "generate_content") from e


async def generate_consultation(prompt: str, symptoms: str) -> AIResult:
    """
    Produces the consultation answer for a rendered prompt.

    Without a configured model the placeholder text is returned. A failing
    model call degrades to the placeholder with zero confidence instead of
    failing the consultation.
    """
    if not settings.GEMINI_API_KEY:
        return AIResult(placeholder_response(symptoms), settings.AI_DEFAULT_CONFIDENCE)

    try:
        text = await generate_content(prompt)
    except UpstreamError as e:
        logger.warning(f"AI generation degraded to placeholder: {e.message}")
        return AIResult(placeholder_response(symptoms), DEGRADED_CONFIDENCE)

    return AIResult(text, settings.AI_DEFAULT_CONFIDENCE)

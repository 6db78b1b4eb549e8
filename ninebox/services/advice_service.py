"""
Development Advice Service - Nine-Box Talent Review
ninebox/services/advice_service.py

Generates a short development plan for an assessed employee with Google
Gemini. Without an API key the service answers with a fixed message, so the
rest of the application keeps working.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors

from ninebox.config import settings
from ninebox.scoring.grid import GridCategory

logger = logging.getLogger(__name__)

MSG_NOT_CONFIGURED = "Development advice is not configured."
MSG_EMPTY_RESPONSE = "Could not generate recommendations."
MSG_API_ERROR = "The AI service did not return recommendations. Try again later."

PROMPT_TEMPLATE = """
Role: You are an experienced HR director and career coach.
Task: Give short, concrete development recommendations (3-4 points) for an
employee based on the nine-box talent review.

Employee: {name}
Position: {position}
Nine-box category: {category_name}
Category description: {category_description}
Typical guidance: {category_guidance}

Answer structure:
1. Short diagnosis.
2. Action plan (list).
3. Risks (if any).

Tone: professional, supportive, business-oriented.
Format: Markdown. Avoid generic phrases; give the manager specifics.
"""


@dataclass(frozen=True)
class AdviceResult:
    text: str
    generated: bool


class AdviceService:
    """Wraps the Gemini client used for development plans."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        self.model = model or settings.GEMINI_MODEL
        self.client = client
        if self.client is None and api_key:
            self.client = genai.Client(api_key=api_key)

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    @staticmethod
    def build_prompt(name: str, position: str, category: GridCategory) -> str:
        return PROMPT_TEMPLATE.format(
            name=name,
            position=position,
            category_name=category.name,
            category_description=category.description,
            category_guidance=category.guidance,
        )

    async def generate_development_plan(
        self,
        name: str,
        position: str,
        category: GridCategory,
    ) -> AdviceResult:
        """
        Ask the model for a development plan.

        Returns:
            AdviceResult with ``generated=False`` and a fixed message when the
            key is missing, the API fails or the model returns no text.
        """
        if not self.is_configured:
            logger.warning("GEMINI_API_KEY is not set; returning placeholder advice")
            return AdviceResult(MSG_NOT_CONFIGURED, generated=False)

        prompt = self.build_prompt(name, position, category)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except (errors.APIError, httpx.HTTPError) as e:
            logger.error(f"Gemini API error while advising on {name}: {e}")
            return AdviceResult(MSG_API_ERROR, generated=False)

        text = (response.text or "").strip()
        if not text:
            logger.warning(f"Gemini returned no text for {name}")
            return AdviceResult(MSG_EMPTY_RESPONSE, generated=False)

        logger.info(f"Generated development advice for {name} ({category.id})")
        return AdviceResult(text, generated=True)

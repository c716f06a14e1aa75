"""Gemini-backed implementation of the advisory port."""

import json
from typing import Optional

import google.generativeai as genai

from src.application.ports.advisory import AdvisoryPort
from src.application.use_cases.constants import (
    ANALYSIS_EMPTY_MESSAGE,
    ANALYSIS_UNAVAILABLE_MESSAGE,
    ANALYSIS_UNCONFIGURED_MESSAGE,
)
from src.domain.constants import FALLBACK_CATEGORY, SUGGESTED_CATEGORIES
from src.domain.services.advisory import AdvisorySnapshot
from src.infrastructure.logging.logger import get_app_logger

ANALYSIS_PROMPT = """Act as my personal financial advisor. Based on the
financial summary below, give a short financial health check with advice.

Summary:
{summary}

Please cover:
1. Asset allocation (cash vs investments).
2. Recent spending patterns worth a reminder, if any.
3. Simple suggestions for the current holdings based on general
   investment principles.

Keep the tone professional but friendly."""

CATEGORY_PROMPT = (
    'Based on the description "{description}", pick the best matching '
    "category from this list: [{categories}]. Reply with the category name "
    "only, no other text."
)


def _response_text(response) -> str:
    """Return the stripped response text, empty when there is none."""
    try:
        text = response.text
    except ValueError:
        # Raised when the candidate was blocked or carries no text part.
        return ""
    return (text or "").strip()


class GeminiAdvisoryClient(AdvisoryPort):
    """Call Gemini for financial commentary and category suggestions.

    Without an API key the client stays unconfigured and every call returns
    its fallback value immediately.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = "gemini-2.5-flash",
        logger=None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Gemini API key; None disables remote calls.
            model_name: Gemini model used for both operations.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()
        self._model = None
        if api_key:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(model_name=model_name)
        else:
            self._logger.warning(
                "GEMINI_API_KEY is not set; AI features are disabled"
            )

    @property
    def configured(self) -> bool:
        return self._model is not None

    async def analyze(self, snapshot: AdvisorySnapshot) -> str:
        """Return a short financial health commentary."""
        if self._model is None:
            return ANALYSIS_UNCONFIGURED_MESSAGE
        prompt = ANALYSIS_PROMPT.format(
            summary=json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False)
        )
        try:
            response = await self._model.generate_content_async(prompt)
        except Exception as exc:
            self._logger.error(f"Gemini analysis failed: {exc}")
            return ANALYSIS_UNAVAILABLE_MESSAGE
        return _response_text(response) or ANALYSIS_EMPTY_MESSAGE

    async def suggest_category(self, description: str) -> str:
        """Return the raw category name suggested for a description."""
        if self._model is None:
            return FALLBACK_CATEGORY
        prompt = CATEGORY_PROMPT.format(
            description=description,
            categories=", ".join(SUGGESTED_CATEGORIES),
        )
        try:
            response = await self._model.generate_content_async(prompt)
        except Exception as exc:
            self._logger.error(f"Gemini category suggestion failed: {exc}")
            return FALLBACK_CATEGORY
        return _response_text(response) or FALLBACK_CATEGORY


__all__ = ["GeminiAdvisoryClient", "ANALYSIS_PROMPT", "CATEGORY_PROMPT"]

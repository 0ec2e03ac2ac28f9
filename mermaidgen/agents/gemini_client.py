import logging
from typing import Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from mermaidgen.config import GenerationSettings, Settings
from mermaidgen.exceptions import UpstreamError, UpstreamErrorKind

logger = logging.getLogger(__name__)


def classify_api_error(status_code: Optional[int], message: str) -> UpstreamErrorKind:
    """Map a Gemini API failure onto an upstream error kind."""
    lowered = (message or "").lower()
    if status_code in (401, 403) or "api key" in lowered:
        return UpstreamErrorKind.AUTH
    if status_code == 429 or "quota" in lowered:
        return UpstreamErrorKind.QUOTA
    return UpstreamErrorKind.UNKNOWN


class GeminiClient:
    """Thin async wrapper around the Gemini generateContent call."""

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None):
        if client is None:
            if not settings.gemini_api_key:
                raise RuntimeError("GEMINI_API_KEY environment variable not set")
            client = genai.Client(api_key=settings.gemini_api_key)
        self.client = client
        self.model = settings.gemini_model
        self.generation = settings.generation
        self.safety_settings = [
            types.SafetySetting(category=s.category, threshold=s.threshold)
            for s in settings.safety_settings
        ]

    def _build_config(self, generation: GenerationSettings) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=generation.temperature,
            top_k=generation.top_k,
            top_p=generation.top_p,
            max_output_tokens=generation.max_output_tokens,
            safety_settings=self.safety_settings,
        )

    async def generate(self, prompt: str, generation: Optional[GenerationSettings] = None) -> str:
        """
        Send a prompt to Gemini and return the raw response text.

        Args:
            prompt: Complete prompt text
            generation: Sampling parameters for this call, defaults to the configured ones

        Returns:
            The generated text, or an empty string when the model returned nothing

        Raises:
            UpstreamError: If the API call fails
        """
        config = self._build_config(generation or self.generation)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model, contents=prompt, config=config
            )
        except genai_errors.APIError as e:
            kind = classify_api_error(e.code, e.message or str(e))
            logger.error(f"Gemini API failed ({kind.value}): {e.code}: {e.message}")
            raise UpstreamError(kind, f"Gemini API failed: {e.code}: {e.message}", status_code=e.code) from e
        except httpx.TransportError as e:
            logger.error(f"Gemini API unreachable: {e}")
            raise UpstreamError(UpstreamErrorKind.TRANSPORT, f"Gemini API unreachable: {e}") from e
        except Exception as e:
            logger.error(f"Gemini call failed: {e!r}")
            raise UpstreamError(UpstreamErrorKind.UNKNOWN, f"Gemini call failed: {e}") from e

        text = response.text
        if not text:
            logger.warning("Gemini returned an empty response")
            return ""
        return text

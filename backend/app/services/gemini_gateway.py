import logging
import time

from google import genai
from google.genai import types

try:
    from backend.app.config import Settings
except ModuleNotFoundError:
    from app.config import Settings


logger = logging.getLogger(__name__)

TRENDS_TEMPERATURE = 0.7
IDEAS_TEMPERATURE = 0.8


class AIGatewayError(RuntimeError):
    pass


class GeminiGateway:
    """Thin wrapper around the Gemini client: prompt in, raw text out."""

    def __init__(self, settings: Settings, client: genai.Client | None = None):
        self.model = settings.gemini_model
        self.client = client or genai.Client(
            api_key=settings.gemini_api_key,
            http_options=types.HttpOptions(timeout=settings.gemini_timeout_seconds * 1000),
        )

    def generate(self, prompt: str, temperature: float) -> str:
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            temperature=temperature,
        )
        started = time.time()
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as exc:
            raise AIGatewayError(f"AI request failed: {exc}") from exc

        logger.debug("gemini %s answered in %.2fs", self.model, time.time() - started)
        text = response.text
        if not text:
            raise AIGatewayError("AI returned an empty response.")
        return text

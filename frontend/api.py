import logging
import os
from typing import Any

import requests
from pydantic import ValidationError

from backend.app.config import ConfigurationError
from backend.app.models import ContentIdeas, SearchParameters, Trend
from backend.app.services.ai_response import TREND_LIST_ADAPTER, MalformedResponse


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000/api/trends"
PLACEHOLDER_MARKER = "YOUR_VERCEL_BACKEND_URL"
DEFAULT_TIMEOUT_SECONDS = 60


class TransportError(RuntimeError):
    pass


class TrendsApiClient:
    """
    Calls the /api/trends endpoint. Each operation is one POST round trip;
    there are no retries, a failed call is reported once to the caller.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        if base_url is None:
            base_url = os.getenv("YTGAP_API_URL") or DEFAULT_API_URL
        if timeout is None:
            timeout = float(os.getenv("YTGAP_CLIENT_TIMEOUT") or DEFAULT_TIMEOUT_SECONDS)
        self.base_url = base_url.strip()
        self.timeout = timeout
        self.session = session or requests.Session()

    def _ensure_configured(self) -> None:
        if not self.base_url or PLACEHOLDER_MARKER in self.base_url:
            raise ConfigurationError(
                "Configuration Error: set YTGAP_API_URL to your deployed /api/trends endpoint."
            )

    def _post(self, action: str, payload: dict[str, Any], fallback_message: str) -> Any:
        self._ensure_configured()
        try:
            response = self.session.post(
                self.base_url,
                json={"action": action, "payload": payload},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Error in %s: %s", action, exc)
            raise TransportError(f"Could not reach the trends API: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = data.get("message") if isinstance(data, dict) else None
            logger.error("Error in %s: HTTP %s %s", action, response.status_code, message or "")
            raise TransportError(message or fallback_message)

        if data is None:
            raise MalformedResponse("Trends API returned a non-JSON response.")
        return data

    def fetch_trends(self, params: SearchParameters) -> list[Trend]:
        data = self._post("fetchTrends", params.to_fetch_payload(), "Failed to fetch trends.")
        if not isinstance(data, list):
            raise MalformedResponse("Trends API returned malformed data: expected an array.")
        try:
            return TREND_LIST_ADAPTER.validate_python(data)
        except ValidationError as exc:
            raise MalformedResponse(f"Trends API returned an invalid trend: {exc.errors()[0].get('msg')}")

    def generate_ideas(self, term: str) -> ContentIdeas:
        data = self._post("generateIdeas", {"term": term}, "Failed to generate content ideas.")
        try:
            return ContentIdeas.model_validate(data)
        except ValidationError:
            raise MalformedResponse("Trends API returned malformed data: object has incorrect shape.")

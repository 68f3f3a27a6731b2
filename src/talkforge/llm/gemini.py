"""Google Gemini completion provider over the generateContent REST API.

Talks to the REST endpoint directly so that HTTP status codes and the
candidate finish reason are available for error reporting.
"""

import logging
from typing import Any

import httpx

from talkforge.errors import GenerationFailure, GenerationFailureKind
from talkforge.llm.base import DEFAULT_TIMEOUT, LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

SAFETY_FINISH_REASON = "SAFETY"


class GeminiProvider(LLMProvider):
    """Google Gemini provider using JSON response mode."""

    label = "Gemini"

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        api_key: str | None = None,
        temperature: float = 0.8,
        timeout: float = DEFAULT_TIMEOUT,
        api_base: str = DEFAULT_API_BASE,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the Gemini provider.

        Args:
            model: Model name (default: gemini-2.5-flash).
            api_key: Gemini API key, sent as the x-goog-api-key header.
            temperature: Sampling temperature.
            timeout: Request timeout in seconds.
            api_base: Base URL of the Generative Language API.
            client: Optional shared HTTP client (a new one is made per call otherwise).
        """
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")
        self._client = client

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_payload(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        """Build the generateContent request body."""
        return {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": self.temperature,
            },
        }

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key or ""}
        if self._client is not None:
            return await self._client.post(self.endpoint, json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.endpoint, json=payload, headers=headers)

    async def agenerate(self, system_prompt: str, user_prompt: str) -> str:
        """Send one generateContent request and return the candidate text.

        Raises:
            GenerationFailure: On transport errors, non-2xx responses, safety
                blocks or an empty candidate.
        """
        payload = self.build_payload(system_prompt, user_prompt)

        try:
            response = await self._post(payload)
        except httpx.HTTPError as e:
            logger.warning(f"Gemini request failed: {type(e).__name__}")
            raise GenerationFailure(f"Failed to generate topics. {e}"[:200]) from e

        if response.status_code >= 400:
            logger.warning(f"Gemini returned HTTP {response.status_code}")
            raise GenerationFailure.from_status(response.status_code, response.text, self.label)

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationFailure(
                "Failed to parse model response.", GenerationFailureKind.EMPTY
            ) from e

        return extract_candidate_text(data)


def extract_candidate_text(data: Any) -> str:
    """Join the text parts of the first candidate.

    Raises:
        GenerationFailure: If the candidate has no text; SAFETY finish reasons
            get a content-policy message.
    """
    candidates = data.get("candidates") if isinstance(data, dict) else None
    first = candidates[0] if isinstance(candidates, list) and candidates else {}
    if not isinstance(first, dict):
        first = {}

    parts = (first.get("content") or {}).get("parts") or []
    text = "\n".join(str(p.get("text") or "") for p in parts if isinstance(p, dict))

    if not text.strip():
        if first.get("finishReason") == SAFETY_FINISH_REASON:
            logger.info("Gemini blocked the request on safety grounds")
            raise GenerationFailure(
                "The request was blocked by Gemini safety filters. "
                "Try adjusting the event context or profile content.",
                GenerationFailureKind.SAFETY,
            )
        raise GenerationFailure("Failed to parse model response.", GenerationFailureKind.EMPTY)

    return text

"""Google Gemini text generator adapter.

Calls the generateContent endpoint:

    POST {base_url}/models/{model}:generateContent?key={api_key}
    {"contents": [{"parts": [{"text": prompt}]}]}

and returns candidates[0].content.parts[0].text. Any transport error,
non-2xx status, malformed body or empty text raises GenerationFailureError;
callers substitute their sentinel text.
"""

from __future__ import annotations

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError

from wombat.application.ports.text_generator import TextGeneratorProtocol
from wombat.config.gemini_config import GeminiConfig
from wombat.domain.errors import GenerationFailureError

log = structlog.get_logger()


class _Part(BaseModel):
    text: str = ""


class _Content(BaseModel):
    parts: list[_Part] = Field(default_factory=list)


class _Candidate(BaseModel):
    content: _Content | None = None


class GenerateContentResponse(BaseModel):
    """The subset of the generateContent response the adapter reads."""

    candidates: list[_Candidate] = Field(default_factory=list)

    def first_text(self) -> str:
        """Text of the first part of the first candidate, or ""."""
        if not self.candidates:
            return ""
        content = self.candidates[0].content
        if content is None or not content.parts:
            return ""
        return content.parts[0].text


class GeminiTextGenerator(TextGeneratorProtocol):
    """TextGeneratorProtocol over the Gemini REST API.

    Usage:
        generator = GeminiTextGenerator(GeminiConfig.from_environment())
        text = await generator.generate("Translate this...")
    """

    def __init__(
        self,
        config: GeminiConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Endpoint, model, key and timeout.
            client: Shared AsyncClient; a short-lived one is opened per
                request when omitted.
        """
        self._config = config
        self._client = client

    async def generate(self, prompt: str) -> str:
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        if self._client is not None:
            response = await self._post(self._client, body)
        else:
            async with httpx.AsyncClient() as client:
                response = await self._post(client, body)

        if response.status_code >= 300:
            log.error(
                "gemini_request_failed",
                status_code=response.status_code,
                model=self._config.model,
            )
            raise GenerationFailureError(f"http_{response.status_code}")

        try:
            parsed = GenerateContentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            log.error("gemini_response_invalid", error=str(exc))
            raise GenerationFailureError("invalid_response") from exc

        text = parsed.first_text().strip()
        if not text:
            log.warning("gemini_response_empty", model=self._config.model)
            raise GenerationFailureError("empty_response")

        log.debug("gemini_generation_completed", model=self._config.model, length=len(text))
        return text

    async def _post(self, client: httpx.AsyncClient, body: dict[str, object]) -> httpx.Response:
        try:
            return await client.post(
                self._config.endpoint,
                params={"key": self._config.api_key},
                json=body,
                timeout=self._config.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            log.error(
                "gemini_transport_error",
                error_type=type(exc).__name__,
                model=self._config.model,
            )
            raise GenerationFailureError("transport_error", str(exc)) from exc

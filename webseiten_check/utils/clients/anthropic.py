"""
Anthropic API client for Webseiten-Check.

A ScoringClient is built per request from the injected settings; there is
no module-level client. Each request performs exactly one upstream call and
failures are not retried.
"""

import logging
from typing import Optional

import anthropic

from webseiten_check.config import Settings
from webseiten_check.errors import ConfigurationError, ScoringCallError

logger = logging.getLogger(__name__)

MISSING_KEY_HINT = (
    "ANTHROPIC_API_KEY ist nicht gesetzt. Lokal: .env anlegen. "
    "Server: ANTHROPIC_API_KEY in den Environment Variables hinterlegen."
)


class ScoringClient:
    """
    Thin wrapper around ``anthropic.AsyncAnthropic`` returning raw response text.

    A client built here owns its HTTP connection pool and releases it in
    ``aclose()``; an injected SDK client is left open for its owner.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 2000,
        timeout: float = 60.0,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self._owns_client = client is None
        self._client = client or anthropic.AsyncAnthropic(
            api_key=api_key, max_retries=0, timeout=timeout
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScoringClient":
        """
        Build a client for one request.

        Raises:
            ConfigurationError: If no API key is configured
        """
        api_key = (settings.ANTHROPIC_API_KEY or "").strip()
        if not api_key:
            raise ConfigurationError("Anthropic API-Key fehlt.", MISSING_KEY_HINT)
        return cls(
            api_key=api_key,
            model=settings.ANTHROPIC_MODEL,
            max_tokens=settings.MAX_TOKENS,
            timeout=settings.SCORING_TIMEOUT,
        )

    async def score(
        self, system_prompt: str, text: str, image_base64: Optional[str] = None
    ) -> str:
        """
        Send one scoring request.

        Args:
            system_prompt: Instructions including the JSON schema
            text: Page text or visitor text
            image_base64: Optional base64 JPEG screenshot

        Returns:
            Raw text of the model's answer (expected to be JSON)
        """
        content = []
        if image_base64:
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": "image/jpeg",
                    "data": image_base64,
                },
            })
        content.append({
            "type": "text",
            "text": f"{text}\n\nAntworte ausschließlich mit dem JSON-Objekt im vorgegebenen Format.",
        })

        try:
            message = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIError as e:
            logger.error(f"❌ Anthropic API failure: {str(e)}")
            raise ScoringCallError("Fehler bei der KI-Analyse.", str(e)) from e

        parts = [block.text for block in message.content if getattr(block, "type", "") == "text"]
        return "".join(parts).strip()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this wrapper created it"""
        if self._owns_client and not self._client.is_closed():
            await self._client.close()

    async def __aenter__(self) -> "ScoringClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

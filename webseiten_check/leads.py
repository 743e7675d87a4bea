"""
Lead capture for Webseiten-Check.

Leads are forwarded once to an external spreadsheet webhook and never stored
locally. Forwarding problems are logged; they never block the visitor.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx

from webseiten_check.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class LeadRecord:
    email: str
    url: str
    keywords: str = ""
    score: Optional[float] = None

    def to_payload(self) -> dict:
        return {
            "email": self.email,
            "url": self.url,
            "keywords": self.keywords,
            "score": self.score,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }


class LeadSink:
    """Forwards leads to the configured webhook as JSON."""

    def __init__(
        self,
        webhook_url: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = (webhook_url or "").strip() or None
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "LeadSink":
        return cls(settings.LEAD_WEBHOOK_URL, timeout=settings.LEAD_WEBHOOK_TIMEOUT)

    async def forward(self, lead: LeadRecord) -> bool:
        """
        Send one lead to the webhook.

        Returns:
            True if the webhook accepted the lead, False otherwise. Never raises.
        """
        if not self.webhook_url:
            logger.info(f"📥 New lead (LEAD_WEBHOOK_URL not set, not forwarded): {lead.email} {lead.url} {lead.keywords}")
            return False

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport, follow_redirects=True
            ) as client:
                response = await client.post(self.webhook_url, json=lead.to_payload())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"⚠️  Lead webhook unreachable, lead for {lead.email} dropped: {str(e)}")
            return False

        if not response.is_success:
            logger.warning(f"⚠️  Lead webhook answered HTTP {response.status_code} for {lead.email}")
            return False

        logger.info(f"✅ Lead forwarded: {lead.email}")
        return True

"""
Shared fixtures: settings, a canned scoring client, a fake browser and an
app client with all upstream dependencies swapped out.
"""

import io
import json
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from webseiten_check.api.dependencies import (
    get_browser_provider_factory,
    get_lead_sink,
    get_scoring_client_factory,
)
from webseiten_check.config import Settings, get_settings
from webseiten_check.leads import LeadSink

PAGE_HTML = """<html><head>
<title>Coaching für Gründer</title>
<meta name="description" content="Wir begleiten Gründer vom ersten Kunden bis zum Team.">
</head><body>
<script>window.tracking = true;</script>
<h1>Coaching   für Gründer</h1>
<p>Buche jetzt dein   Erstgespräch.</p>
</body></html>"""

WEBSITE_PAYLOAD = {
    "keywordResults": [
        {"keyword": "Coaching", "isPresent": True},
        {"keyword": "Kurse", "isPresent": False},
        {"keyword": "Marketing", "isPresent": True},
    ],
    "clarityFeedback": "Das Angebot wird erst im zweiten Absatz klar.",
    "designScore": 70,
    "designFeedback": "Ruhiges Layout, aber zu wenig Kontrast im Hero.",
    "techScore": 60,
    "techFeedback": "Meta-Description vorhanden, Überschriften unsauber.",
    "websiteScore": 65,
    "scoreBegruendung": "Solide Seite mit unklarem Hook.",
    "hauptproblem": "Der Besucher erfährt nicht sofort, was er bekommt.",
    "analyseCards": [
        {
            "problemTitel": "Schwacher Hook",
            "problemBeschreibung": "Die Headline beschreibt dich, nicht den Kunden.",
            "vorher": "Coaching für Gründer",
            "nachher": "In 90 Tagen vom Gründer zum ersten Team",
            "warumBesser": "Der Nutzen steht vorne.",
        },
        {"problemTitel": "Kein CTA", "vorher": "Buche jetzt dein Erstgespräch.", "nachher": "Sichere dir dein kostenloses Erstgespräch"},
        {"problemTitel": "Zu abstrakt", "vorher": "Wir begleiten Gründer", "nachher": "Wir haben 140 Gründer begleitet"},
    ],
    "teaserWeitereProbleme": "Es gibt noch 4 weitere Stellen mit Potenzial.",
    "accessibilityChecks": [
        {"criterion": "Kontrast", "status": "grenzwertig", "detail": "Hellgrauer Text auf Weiß."},
        {"criterion": "Alternativtexte", "status": "gut", "detail": "Bilder sind beschrieben."},
    ],
    "accessibilityScore": 62,
}

TEXT_PAYLOAD = {
    "kiScore": 7,
    "kiScoreBegruendung": "Viele Floskeln und gleichförmige Sätze.",
    "hauptproblem": "Der Text klingt glatt und austauschbar.",
    "analyseCards": [
        {"problemTitel": "Floskel-Einstieg", "vorher": "In der heutigen Zeit", "nachher": "Letzte Woche"},
        {"problemTitel": "Superlative", "vorher": "einzigartig", "nachher": "als einziger in Köln"},
        {"problemTitel": "Passiv", "vorher": "wird angeboten", "nachher": "biete ich an"},
    ],
    "plattformPassung": "Für LinkedIn fehlt die persönliche Haltung.",
    "teaserWeitereProbleme": "Zwei weitere Stellen verraten die KI-Herkunft.",
}

TWENTY_WORDS = " ".join(f"wort{i}" for i in range(20))


def make_jpeg(width: int = 120, height: int = 80) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format="JPEG")
    return buffer.getvalue()


class FakeScoringClient:
    """Stands in for ScoringClient and returns a canned answer."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else json.dumps(WEBSITE_PAYLOAD)
        self.error = error
        self.calls = []
        self.closed = False

    async def score(self, system_prompt, text, image_base64=None):
        self.calls.append({"system_prompt": system_prompt, "text": text, "image_base64": image_base64})
        if self.error is not None:
            raise self.error
        return self.response

    async def aclose(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


def make_page(html: str = PAGE_HTML) -> MagicMock:
    page = MagicMock()
    page.goto = AsyncMock(return_value=None)
    page.screenshot = AsyncMock(return_value=make_jpeg())
    page.content = AsyncMock(return_value=html)
    return page


class FakeBrowserProvider:
    """Yields a mocked Playwright page instead of launching Chromium."""

    name = "fake"

    def __init__(self, page=None, error=None):
        self.page = page or make_page()
        self.error = error
        self.acquired = 0
        self.released = 0

    @asynccontextmanager
    async def acquire_page(self):
        if self.error is not None:
            raise self.error
        self.acquired += 1
        try:
            yield self.page
        finally:
            self.released += 1


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        ANTHROPIC_API_KEY="sk-ant-test",
        LEAD_WEBHOOK_URL=None,
        ENVIRONMENT="production",
        BROWSER_PROFILE="local",
    )


@pytest.fixture
def scoring_client():
    return FakeScoringClient()


@pytest.fixture
def browser_provider():
    return FakeBrowserProvider()


@pytest.fixture
def received_leads():
    """Lead payloads posted to the mocked webhook."""
    return []


@pytest.fixture
def lead_sink(received_leads):
    def handler(request: httpx.Request) -> httpx.Response:
        received_leads.append(json.loads(request.content))
        return httpx.Response(200, json={"result": "ok"})

    return LeadSink("https://hooks.example.com/leads", transport=httpx.MockTransport(handler))


@pytest.fixture
def app(settings, scoring_client, browser_provider, lead_sink):
    from main import app

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_scoring_client_factory] = lambda: (lambda _settings: scoring_client)
    app.dependency_overrides[get_browser_provider_factory] = lambda: (lambda _settings: browser_provider)
    app.dependency_overrides[get_lead_sink] = lambda: lead_sink
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client

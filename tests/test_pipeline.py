"""
Tests for the request pipelines: the scoring client is closed on every path.
"""

import json

import pytest

from conftest import TEXT_PAYLOAD, TWENTY_WORDS, FakeBrowserProvider, FakeScoringClient
from webseiten_check.analyzer.pipeline import analyze_text, analyze_website
from webseiten_check.api.models import AnalysisRequest, TextAnalysisRequest
from webseiten_check.errors import BrowserLaunchError, InputValidationError, ScoringParseError


@pytest.mark.asyncio
async def test_website_check_closes_client(settings):
    client = FakeScoringClient()

    result = await analyze_website(
        AnalysisRequest(url="beispiel.de", keywords="Coaching, Kurse"),
        settings,
        browser_provider=FakeBrowserProvider(),
        scoring_client=client,
    )

    assert result.totalScore == 60
    assert client.closed is True


@pytest.mark.asyncio
async def test_empty_url_still_closes_client(settings):
    client = FakeScoringClient()

    with pytest.raises(InputValidationError):
        await analyze_website(AnalysisRequest(url=" "), settings, FakeBrowserProvider(), client)

    assert client.closed is True
    assert client.calls == []


@pytest.mark.asyncio
async def test_browser_failure_closes_client(settings):
    client = FakeScoringClient()
    provider = FakeBrowserProvider(error=BrowserLaunchError("Fehler bei der Analyse.", "boom"))

    with pytest.raises(BrowserLaunchError):
        await analyze_website(AnalysisRequest(url="beispiel.de"), settings, provider, client)

    assert client.closed is True


@pytest.mark.asyncio
async def test_text_check_closes_client(settings):
    client = FakeScoringClient(response=json.dumps(TEXT_PAYLOAD))

    result = await analyze_text(TextAnalysisRequest(text=TWENTY_WORDS, platform="LinkedIn"), settings, client)

    assert result.kiScore == 7
    assert client.closed is True


@pytest.mark.asyncio
async def test_short_text_and_parse_error_close_client(settings):
    short = FakeScoringClient()
    with pytest.raises(InputValidationError):
        await analyze_text(TextAnalysisRequest(text="zu kurz"), settings, short)
    assert short.closed is True

    garbled = FakeScoringClient(response="Leider kann ich diesen Text nicht bewerten.")
    with pytest.raises(ScoringParseError):
        await analyze_text(TextAnalysisRequest(text=TWENTY_WORDS), settings, garbled)
    assert garbled.closed is True

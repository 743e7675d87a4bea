"""
Request pipelines for Webseiten-Check.

Website check: acquire browser -> capture page -> build prompt -> scoring
call -> normalize. Text check: validate -> build prompt -> scoring call ->
normalize. Every step is awaited in sequence; nothing is retried.
"""

import logging
import time
from typing import Optional

from playwright.async_api import Error as PlaywrightError

from webseiten_check.analyzer.capture import capture_page
from webseiten_check.analyzer.prompts import get_text_prompt, get_website_prompt, resolve_platform
from webseiten_check.analyzer.scoring import (
    TextScoring,
    WebsiteScoring,
    build_text_response,
    build_website_response,
    count_words,
    parse_keywords,
    parse_scoring_payload,
)
from webseiten_check.api.models import (
    AnalysisRequest,
    TextAnalysisRequest,
    TextAnalysisResponse,
    WebsiteAnalysisResponse,
)
from webseiten_check.config import Settings
from webseiten_check.core.browser import BrowserProvider, get_browser_provider
from webseiten_check.errors import InputValidationError, UpstreamError
from webseiten_check.utils.clients.anthropic import ScoringClient

logger = logging.getLogger(__name__)


async def analyze_website(
    request: AnalysisRequest,
    settings: Settings,
    browser_provider: Optional[BrowserProvider] = None,
    scoring_client: Optional[ScoringClient] = None,
) -> WebsiteAnalysisResponse:
    """
    Capture a website and score it.

    The scoring client is closed when the check ends, whatever the outcome.

    Args:
        request: URL and comma-separated keywords
        settings: Injected configuration
        browser_provider: Overrides the configured browser strategy
        scoring_client: Overrides the per-request Anthropic client

    Returns:
        Fully populated WebsiteAnalysisResponse

    Raises:
        CheckError: Configuration, input or upstream failure
    """
    client = scoring_client or ScoringClient.from_settings(settings)
    async with client:
        return await _score_website(request, settings, client, browser_provider)


async def _score_website(
    request: AnalysisRequest,
    settings: Settings,
    client: ScoringClient,
    browser_provider: Optional[BrowserProvider],
) -> WebsiteAnalysisResponse:
    if not request.url.strip():
        raise InputValidationError("Keine URL angegeben.", "Bitte gib die Adresse deiner Webseite ein.")

    keywords = parse_keywords(request.keywords)
    provider = browser_provider or get_browser_provider(settings)
    start = time.time()

    try:
        async with provider.acquire_page() as page:
            captured = await capture_page(page, request.url, settings)
    except PlaywrightError as e:
        logger.error(f"❌ Page capture failed for {request.url}: {str(e)}")
        raise UpstreamError("Fehler bei der Analyse.", str(e)) from e

    logger.info(f"🤖 Scoring {captured.url} with {len(keywords)} keywords")
    response_text = await client.score(
        get_website_prompt(keywords),
        captured.as_prompt_text(),
        image_base64=captured.screenshot_base64,
    )

    scoring = parse_scoring_payload(response_text, WebsiteScoring)
    result = build_website_response(
        scoring,
        url=captured.url,
        keywords=keywords,
        accessibility_threshold=settings.ACCESSIBILITY_WARNING_THRESHOLD,
    )
    logger.info(f"✅ Website check for {captured.url} finished in {time.time() - start:.2f}s")
    return result


async def analyze_text(
    request: TextAnalysisRequest,
    settings: Settings,
    scoring_client: Optional[ScoringClient] = None,
) -> TextAnalysisResponse:
    """
    Score a submitted text for AI-typical phrasing.

    Raises:
        ConfigurationError: If no API key is configured
        InputValidationError: If the text has fewer than MIN_TEXT_WORDS words
        UpstreamError: Scoring call or parsing failed
    """
    client = scoring_client or ScoringClient.from_settings(settings)
    async with client:
        return await _score_text(request, settings, client)


async def _score_text(
    request: TextAnalysisRequest, settings: Settings, client: ScoringClient
) -> TextAnalysisResponse:
    text = (request.text or "").strip()
    if count_words(text) < settings.MIN_TEXT_WORDS:
        raise InputValidationError(
            "Text zu kurz",
            f"Bitte gib mindestens {settings.MIN_TEXT_WORDS} Wörter ein, "
            "damit eine aussagekräftige Analyse möglich ist.",
        )

    keywords = parse_keywords(request.keywords)
    platform = resolve_platform(request.platform)

    logger.info(f"🤖 Scoring {platform} text ({count_words(text)} words)")
    response_text = await client.score(
        get_text_prompt(keywords, platform),
        f"Analysiere folgenden {platform}-Text:\n\n---\n{text[: settings.MAX_TEXT_INPUT_CHARS]}\n---",
    )

    scoring = parse_scoring_payload(response_text, TextScoring)
    return build_text_response(scoring, platform)

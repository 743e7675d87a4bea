"""
Page capture for Webseiten-Check.

Navigates an acquired page to the target address and extracts the
screenshot, rendered markup and a bounded plain-text version of the body.
"""

import logging
import re
import time
from dataclasses import dataclass

from bs4 import BeautifulSoup
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from webseiten_check.config import Settings
from webseiten_check.errors import NavigationTimeoutError
from webseiten_check.utils.images.processor import resize_screenshot_if_needed

logger = logging.getLogger(__name__)

TITLE_FALLBACK = "Kein Titel"
META_DESCRIPTION_FALLBACK = "Keine Beschreibung"


@dataclass
class CapturedPage:
    url: str
    screenshot_base64: str
    html: str
    text: str
    title: str
    meta_description: str

    def as_prompt_text(self) -> str:
        return (
            f"Title: {self.title}\n"
            f"Description: {self.meta_description}\n\n"
            f"Webseiten-Text: {self.text}"
        )


def normalize_url(url: str) -> str:
    """Prefix https:// when the address has no scheme"""
    url = (url or "").strip()
    if not url.startswith("http"):
        url = f"https://{url}"
    return url


def extract_page_content(html: str, max_chars: int = 5000) -> dict:
    """
    Pull title, meta description and whitespace-collapsed body text out of HTML.

    Returns:
        dict with ``title``, ``meta_description`` and ``text``
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    meta_description = ""
    meta_tag = soup.find("meta", attrs={"name": re.compile(r"^description$", re.I)})
    if meta_tag and meta_tag.get("content"):
        meta_description = meta_tag["content"].strip()

    body = soup.body or soup
    for tag in body.find_all(["script", "style", "noscript"]):
        tag.decompose()
    text = re.sub(r"\s+", " ", body.get_text(" ")).strip()[:max_chars]

    return {
        "title": title or TITLE_FALLBACK,
        "meta_description": meta_description or META_DESCRIPTION_FALLBACK,
        "text": text,
    }


async def capture_page(page: Page, url: str, settings: Settings) -> CapturedPage:
    """
    Navigate to ``url`` and capture screenshot, markup and text.

    Raises:
        NavigationTimeoutError: If the page doesn't settle within NAVIGATION_TIMEOUT
    """
    target_url = normalize_url(url)
    timeout_ms = settings.NAVIGATION_TIMEOUT * 1000

    logger.info(f"📡 Navigating to {target_url}")
    nav_start = time.time()
    try:
        await page.goto(target_url, wait_until="networkidle", timeout=timeout_ms)
    except PlaywrightTimeoutError as e:
        logger.error(f"⏱️ Navigation timeout after {settings.NAVIGATION_TIMEOUT}s for {target_url}")
        raise NavigationTimeoutError(
            "Fehler bei der Analyse.",
            f"Die Seite {target_url} hat nicht innerhalb von {settings.NAVIGATION_TIMEOUT} Sekunden geladen.",
        ) from e
    logger.info(f"⏱️  Page navigation completed in {time.time() - nav_start:.2f}s")

    screenshot_bytes = await page.screenshot(type="jpeg", quality=80)
    screenshot_base64 = resize_screenshot_if_needed(
        screenshot_bytes, max_dimension=settings.MAX_SCREENSHOT_DIMENSION
    )

    html = await page.content()
    content = extract_page_content(html, max_chars=settings.MAX_PAGE_TEXT_CHARS)
    logger.info(f"📄 Page title: {content['title']} ({len(content['text'])} chars of text)")

    return CapturedPage(
        url=target_url,
        screenshot_base64=screenshot_base64,
        html=html,
        text=content["text"],
        title=content["title"],
        meta_description=content["meta_description"],
    )

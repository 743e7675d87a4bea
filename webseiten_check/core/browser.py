"""
Browser acquisition for Webseiten-Check
Launches one headless Chromium per request through Playwright, using either
the local profile or the serverless profile
"""

import asyncio
import logging
import os
import shutil
import stat
import tarfile
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional

import httpx
from playwright.async_api import async_playwright, Browser, Page, Playwright
from playwright.async_api import Error as PlaywrightError

from webseiten_check.config import Settings
from webseiten_check.errors import BrowserLaunchError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

CHROMIUM_PACK_DIR = Path(tempfile.gettempdir()) / "chromium-pack"
CHROMIUM_BINARY_NAMES = ("chromium", "chrome", "headless_shell")
PACK_COMPLETE_MARKER = ".complete"


class BrowserProvider:
    """
    Acquires a controllable browser page for one request.

    Subclasses decide how the browser binary is located and launched. The
    browser is always closed when the ``acquire_page`` context exits.
    """

    name = "base"
    launch_args: List[str] = []

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def launch_timeout(self) -> Optional[float]:
        return None

    async def _launch(self, playwright: Playwright) -> Browser:
        raise NotImplementedError

    @asynccontextmanager
    async def acquire_page(self) -> AsyncIterator[Page]:
        """
        Launch a browser and yield a fresh page with the configured viewport.

        Raises:
            BrowserLaunchError: If the browser cannot be started in time
        """
        playwright = await async_playwright().start()
        browser = None
        try:
            try:
                browser = await asyncio.wait_for(
                    self._launch(playwright), timeout=self.launch_timeout
                )
            except asyncio.TimeoutError as e:
                logger.error(f"⏱️ Browser launch exceeded {self.launch_timeout}s ({self.name})")
                raise BrowserLaunchError(
                    "Fehler bei der Analyse.",
                    f"Browser-Start hat länger als {self.launch_timeout} Sekunden gedauert.",
                ) from e
            except PlaywrightError as e:
                logger.error(f"❌ Browser launch failed ({self.name}): {str(e)}")
                raise BrowserLaunchError("Fehler bei der Analyse.", f"Failed to launch browser: {str(e)}") from e

            logger.info(f"🚀 Browser launched ({self.name} profile)")
            context = await browser.new_context(
                viewport={
                    "width": self.settings.VIEWPORT_WIDTH,
                    "height": self.settings.VIEWPORT_HEIGHT,
                },
                user_agent=USER_AGENT,
            )
            page = await context.new_page()
            yield page
        finally:
            await self._close(browser, playwright)

    async def _close(self, browser: Optional[Browser], playwright: Playwright) -> None:
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.warning(f"⚠️  Error closing browser: {str(e)}")
        try:
            await playwright.stop()
        except Exception as e:
            logger.warning(f"⚠️  Error stopping Playwright: {str(e)}")


class LocalBrowserProvider(BrowserProvider):
    """Fully installed Playwright Chromium with the sandbox disabled."""

    name = "local"
    launch_args = ["--no-sandbox", "--disable-setuid-sandbox"]

    async def _launch(self, playwright: Playwright) -> Browser:
        return await playwright.chromium.launch(headless=True, args=self.launch_args)


class ServerlessBrowserProvider(BrowserProvider):
    """
    Trimmed Chromium for deployment platforms that don't ship a browser.

    The binary comes from CHROMIUM_EXECUTABLE_PATH, or is downloaded from
    CHROMIUM_PACK_URL into the temp directory on first use.
    """

    name = "serverless"
    launch_args = [
        "--allow-pre-commit-input",
        "--disable-background-networking",
        "--disable-default-apps",
        "--disable-dev-shm-usage",  # /dev/shm is tiny in lambda containers
        "--disable-extensions",
        "--disable-gpu",
        "--disable-setuid-sandbox",
        "--no-first-run",
        "--no-sandbox",
        "--no-zygote",
        "--single-process",
    ]

    @property
    def launch_timeout(self) -> Optional[float]:
        return self.settings.BROWSER_LAUNCH_TIMEOUT

    async def resolve_executable_path(self) -> Optional[str]:
        if self.settings.CHROMIUM_EXECUTABLE_PATH:
            return self.settings.CHROMIUM_EXECUTABLE_PATH
        if self.settings.CHROMIUM_PACK_URL:
            path = await asyncio.to_thread(
                download_chromium_pack, self.settings.CHROMIUM_PACK_URL
            )
            return str(path)
        # Fall back to the Playwright-managed build
        return None

    async def _launch(self, playwright: Playwright) -> Browser:
        try:
            executable_path = await self.resolve_executable_path()
        except (httpx.HTTPError, tarfile.TarError, OSError) as e:
            raise BrowserLaunchError(
                "Fehler bei der Analyse.", f"Chromium pack unavailable: {str(e)}"
            ) from e
        return await playwright.chromium.launch(
            headless=True,
            executable_path=executable_path,
            args=self.launch_args,
        )


def _find_chromium_binary(directory: Path) -> Optional[Path]:
    for candidate in sorted(directory.rglob("*")):
        if candidate.is_file() and candidate.name in CHROMIUM_BINARY_NAMES:
            return candidate
    return None


def _completed_binary(directory: Path) -> Optional[Path]:
    """Binary of a finished unpack; directories without the marker don't count"""
    if not (directory / PACK_COMPLETE_MARKER).is_file():
        return None
    return _find_chromium_binary(directory)


def download_chromium_pack(pack_url: str, target_dir: Path = CHROMIUM_PACK_DIR) -> Path:
    """
    Download and unpack a Chromium tarball, reusing an earlier finished unpack.

    The archive is unpacked into a staging directory next to ``target_dir``
    and moved into place only after the binary is executable and the
    completion marker is written. Leftovers of an interrupted unpack are
    replaced.

    Args:
        pack_url: URL of a .tar or .tar.gz archive containing the binary
        target_dir: Directory to unpack into

    Returns:
        Path to the executable

    Raises:
        FileNotFoundError: If the archive holds no Chromium binary
    """
    existing = _completed_binary(target_dir)
    if existing is not None:
        return existing

    target_dir.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f"{target_dir.name}-", dir=target_dir.parent))
    logger.info(f"📦 Downloading Chromium pack from {pack_url}")

    try:
        with tempfile.TemporaryFile() as archive:
            with httpx.stream("GET", pack_url, follow_redirects=True, timeout=60.0) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes():
                    archive.write(chunk)
            archive.seek(0)
            with tarfile.open(fileobj=archive, mode="r:*") as tar:
                tar.extractall(staging, filter="data")

        binary = _find_chromium_binary(staging)
        if binary is None:
            raise FileNotFoundError(f"No Chromium binary found in pack {pack_url}")
        os.chmod(binary, binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        (staging / PACK_COMPLETE_MARKER).touch()

        if target_dir.exists() and _completed_binary(target_dir) is None:
            logger.warning(f"⚠️  Removing incomplete Chromium unpack in {target_dir}")
            shutil.rmtree(target_dir)
        try:
            os.replace(staging, target_dir)
        except OSError:
            # A concurrent request finished first
            existing = _completed_binary(target_dir)
            if existing is None:
                raise
            return existing
    finally:
        if staging.exists():
            shutil.rmtree(staging, ignore_errors=True)

    binary = target_dir / binary.relative_to(staging)
    logger.info(f"✅ Chromium unpacked to {binary}")
    return binary


def get_browser_provider(settings: Settings) -> BrowserProvider:
    """Select the browser acquisition strategy from configuration"""
    if settings.browser_profile == "serverless":
        return ServerlessBrowserProvider(settings)
    return LocalBrowserProvider(settings)

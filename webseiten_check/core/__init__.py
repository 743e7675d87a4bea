# Core package - Infrastructure components
from .browser import (
    BrowserProvider,
    LocalBrowserProvider,
    ServerlessBrowserProvider,
    get_browser_provider,
)

__all__ = [
    "BrowserProvider",
    "LocalBrowserProvider",
    "ServerlessBrowserProvider",
    "get_browser_provider",
]

"""
FastAPI dependencies. Tests swap these through ``app.dependency_overrides``.
"""

from typing import Callable

from fastapi import Depends

from webseiten_check.config import Settings, get_settings
from webseiten_check.core.browser import BrowserProvider, get_browser_provider
from webseiten_check.leads import LeadSink
from webseiten_check.utils.clients.anthropic import ScoringClient

ScoringClientFactory = Callable[[Settings], ScoringClient]
BrowserProviderFactory = Callable[[Settings], BrowserProvider]


def get_scoring_client_factory() -> ScoringClientFactory:
    return ScoringClient.from_settings


def get_browser_provider_factory() -> BrowserProviderFactory:
    return get_browser_provider


def get_lead_sink(settings: Settings = Depends(get_settings)) -> LeadSink:
    return LeadSink.from_settings(settings)

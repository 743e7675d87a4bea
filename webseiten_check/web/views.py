"""
Server-rendered report pages: website check (/) and text check (/text-check).
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ValidationError

from webseiten_check.analyzer.pipeline import analyze_text, analyze_website
from webseiten_check.analyzer.prompts import DEFAULT_PLATFORM, PLATFORMS, resolve_platform
from webseiten_check.analyzer.scoring import count_words
from webseiten_check.api.dependencies import (
    BrowserProviderFactory,
    ScoringClientFactory,
    get_browser_provider_factory,
    get_lead_sink,
    get_scoring_client_factory,
)
from webseiten_check.api.models import (
    AnalysisRequest,
    TextAnalysisRequest,
    TextAnalysisResponse,
    WebsiteAnalysisResponse,
)
from webseiten_check.config import Settings, get_settings
from webseiten_check.errors import InputValidationError
from webseiten_check.leads import LeadRecord, LeadSink
from webseiten_check.web.flow import ReportFlow, Step
from webseiten_check.web.report import ki_score_label, score_label, text_cta, website_cta

logger = logging.getLogger(__name__)

RESTART_MESSAGE = "Die Analyse ist abgelaufen. Bitte starte sie neu."

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

web_router = APIRouter()


def _restore(flow: ReportFlow, payload: str, model: type) -> Optional[BaseModel]:
    """Rebuild the email-gate step from the hidden result field"""
    try:
        result = model.model_validate_json(payload)
    except ValidationError:
        logger.warning("⚠️  Report payload missing or invalid, restarting flow")
        flow.error = RESTART_MESSAGE
        return None
    flow.step = Step.EMAIL_GATE
    flow.result = result
    return result


def _render_website(request: Request, flow: ReportFlow, settings: Settings, url: str = "", keywords: str = ""):
    result = flow.result
    context = {
        "flow": flow,
        "url": url,
        "keywords": keywords,
        "result": result,
        "result_json": result.model_dump_json() if result is not None else "",
        "booking_url": settings.BOOKING_URL,
        "today": date.today().strftime("%d.%m.%Y"),
    }
    if isinstance(result, WebsiteAnalysisResponse):
        context["label"] = score_label(result.websiteScore)
        context["cta"] = website_cta(result.websiteScore, settings.cta_thresholds)
    return templates.TemplateResponse(request, "website_check.html", context)


def _render_text(
    request: Request,
    flow: ReportFlow,
    settings: Settings,
    text: str = "",
    platform: str = DEFAULT_PLATFORM,
    keywords: str = "",
):
    result = flow.result
    context = {
        "flow": flow,
        "text": text,
        "platform": platform,
        "platforms": PLATFORMS,
        "keywords": keywords,
        "max_words": settings.MAX_TEXT_WORDS,
        "word_count": count_words(text),
        "result": result,
        "result_json": result.model_dump_json() if result is not None else "",
        "booking_url": settings.BOOKING_URL,
        "today": date.today().strftime("%d.%m.%Y"),
    }
    if isinstance(result, TextAnalysisResponse):
        context["label"] = ki_score_label(result.kiScore)
        context["cta"] = text_cta(result.kiScore, settings.ki_cta_thresholds)
    return templates.TemplateResponse(request, "text_check.html", context)


@web_router.get("/", response_class=HTMLResponse)
async def website_check_page(request: Request, settings: Settings = Depends(get_settings)):
    return _render_website(request, ReportFlow(), settings)


@web_router.post("/", response_class=HTMLResponse)
async def website_check_submit(
    request: Request,
    url: str = Form(""),
    keywords: str = Form(""),
    settings: Settings = Depends(get_settings),
    scoring_client_factory: ScoringClientFactory = Depends(get_scoring_client_factory),
    browser_provider_factory: BrowserProviderFactory = Depends(get_browser_provider_factory),
):
    flow = ReportFlow()

    async def run():
        return await analyze_website(
            AnalysisRequest(url=url, keywords=keywords),
            settings,
            browser_provider=browser_provider_factory(settings),
            scoring_client=scoring_client_factory(settings),
        )

    await flow.analyze(run)
    return _render_website(request, flow, settings, url=url, keywords=keywords)


@web_router.post("/unlock", response_class=HTMLResponse)
async def website_check_unlock(
    request: Request,
    email: str = Form(""),
    url: str = Form(""),
    keywords: str = Form(""),
    result: str = Form(""),
    settings: Settings = Depends(get_settings),
    sink: LeadSink = Depends(get_lead_sink),
):
    flow = ReportFlow()
    report = _restore(flow, result, WebsiteAnalysisResponse)
    if report is not None:
        await flow.unlock(
            email,
            lambda address: sink.forward(
                LeadRecord(email=address, url=url, keywords=keywords, score=report.totalScore)
            ),
        )
    return _render_website(request, flow, settings, url=url, keywords=keywords)


@web_router.get("/text-check", response_class=HTMLResponse)
async def text_check_page(request: Request, settings: Settings = Depends(get_settings)):
    return _render_text(request, ReportFlow(), settings)


@web_router.post("/text-check", response_class=HTMLResponse)
async def text_check_submit(
    request: Request,
    text: str = Form(""),
    platform: str = Form(DEFAULT_PLATFORM),
    keywords: str = Form(""),
    settings: Settings = Depends(get_settings),
    scoring_client_factory: ScoringClientFactory = Depends(get_scoring_client_factory),
):
    flow = ReportFlow()
    platform = resolve_platform(platform)

    async def run():
        if count_words(text) > settings.MAX_TEXT_WORDS:
            raise InputValidationError(
                "Text zu lang", f"Bitte kürze deinen Text auf maximal {settings.MAX_TEXT_WORDS} Wörter."
            )
        return await analyze_text(
            TextAnalysisRequest(text=text, platform=platform, keywords=keywords),
            settings,
            scoring_client=scoring_client_factory(settings),
        )

    await flow.analyze(run)
    return _render_text(request, flow, settings, text=text, platform=platform, keywords=keywords)


@web_router.post("/text-check/unlock", response_class=HTMLResponse)
async def text_check_unlock(
    request: Request,
    email: str = Form(""),
    platform: str = Form(DEFAULT_PLATFORM),
    keywords: str = Form(""),
    result: str = Form(""),
    settings: Settings = Depends(get_settings),
    sink: LeadSink = Depends(get_lead_sink),
):
    flow = ReportFlow()
    platform = resolve_platform(platform)
    report = _restore(flow, result, TextAnalysisResponse)
    if report is not None:
        await flow.unlock(
            email,
            lambda address: sink.forward(
                LeadRecord(
                    email=address,
                    url=f"{platform} (Text-Check)",
                    keywords=keywords,
                    score=report.totalScore,
                )
            ),
        )
    return _render_text(request, flow, settings, platform=platform, keywords=keywords)

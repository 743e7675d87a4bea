import logging
import traceback

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from webseiten_check.analyzer.pipeline import analyze_text, analyze_website
from webseiten_check.api.dependencies import (
    BrowserProviderFactory,
    ScoringClientFactory,
    get_browser_provider_factory,
    get_lead_sink,
    get_scoring_client_factory,
)
from webseiten_check.api.models import (
    AnalysisRequest,
    ErrorResponse,
    LeadRequest,
    LeadResponse,
    TextAnalysisRequest,
    TextAnalysisResponse,
    WebsiteAnalysisResponse,
)
from webseiten_check.config import Settings, get_settings
from webseiten_check.errors import CheckError
from webseiten_check.leads import LeadRecord, LeadSink

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def error_response(error: CheckError, settings: Settings) -> JSONResponse:
    """Render a CheckError as ``{error, details}``, plus the stack in development"""
    content = error.to_dict()
    if settings.is_development:
        content["stack"] = traceback.format_exc()
    return JSONResponse(status_code=error.status_code, content=content)


def unexpected_error_response(error: Exception, settings: Settings) -> JSONResponse:
    return error_response(CheckError("Fehler bei der Analyse.", str(error)), settings)


@router.get("/api")
async def root():
    return {
        "service": "Webseiten-Check",
        "status": "running",
        "endpoints": {
            "analyze": "/api/analyze (POST)",
            "analyze_text": "/api/analyze-text (POST)",
            "save_lead": "/api/save-lead (POST)",
        },
    }


@router.post("/api/analyze", response_model=WebsiteAnalysisResponse, responses=ERROR_RESPONSES)
async def analyze_website_endpoint(
    request: AnalysisRequest,
    settings: Settings = Depends(get_settings),
    scoring_client_factory: ScoringClientFactory = Depends(get_scoring_client_factory),
    browser_provider_factory: BrowserProviderFactory = Depends(get_browser_provider_factory),
):
    """
    Captures a website and returns the scored report.

    Clarity and the total score are computed locally from the keyword
    presence flags and category scores returned by Claude.
    """
    try:
        return await analyze_website(
            request,
            settings,
            browser_provider=browser_provider_factory(settings),
            scoring_client=scoring_client_factory(settings),
        )
    except CheckError as e:
        logger.error(f"❌ Website check failed for {request.url}: {e.message}", exc_info=True)
        return error_response(e, settings)
    except Exception as e:
        logger.error(f"❌ Unexpected failure for {request.url}: {str(e)}", exc_info=True)
        return unexpected_error_response(e, settings)


@router.post("/api/analyze-text", response_model=TextAnalysisResponse, responses=ERROR_RESPONSES)
async def analyze_text_endpoint(
    request: TextAnalysisRequest,
    settings: Settings = Depends(get_settings),
    scoring_client_factory: ScoringClientFactory = Depends(get_scoring_client_factory),
):
    """
    Scores a LinkedIn, Instagram or landing page text for AI-typical phrasing.

    Texts with fewer than 20 words are rejected with HTTP 400.
    """
    try:
        return await analyze_text(request, settings, scoring_client=scoring_client_factory(settings))
    except CheckError as e:
        logger.error(f"❌ Text check failed: {e.message}", exc_info=e.status_code >= 500)
        return error_response(e, settings)
    except Exception as e:
        logger.error(f"❌ Unexpected text check failure: {str(e)}", exc_info=True)
        return unexpected_error_response(e, settings)


@router.post("/api/save-lead", response_model=LeadResponse)
async def save_lead(request: LeadRequest, sink: LeadSink = Depends(get_lead_sink)):
    """
    Forwards a lead to the spreadsheet webhook.

    Always answers ``{"success": true}`` so a broken webhook never blocks
    the visitor.
    """
    lead = LeadRecord(
        email=request.email, url=request.url, keywords=request.keywords, score=request.score
    )
    try:
        await sink.forward(lead)
    except Exception as e:
        logger.error(f"❌ Lead forwarding crashed for {lead.email}: {str(e)}", exc_info=True)
    return LeadResponse(success=True)


@router.get("/health")
async def health_check():
    return {"status": "healthy"}


@router.get("/status/detailed")
async def detailed_status_check(settings: Settings = Depends(get_settings)):
    """
    Configuration health for monitoring.

    Reports whether the Anthropic credential and the lead webhook are
    configured and which browser profile requests will use.
    """
    status_info = {
        "api": "healthy",
        "anthropic_api": "configured" if settings.ANTHROPIC_API_KEY.strip() else "missing",
        "lead_webhook": "configured" if settings.LEAD_WEBHOOK_URL else "log_only",
        "browser_profile": settings.browser_profile,
        "model": settings.ANTHROPIC_MODEL,
    }
    status_info["overall_status"] = (
        "degraded" if status_info["anthropic_api"] == "missing" else "healthy"
    )
    return status_info

# API package - FastAPI components
# Router: import from .routes directly (the analyzer imports these models)
from .models import (
    AnalysisRequest,
    TextAnalysisRequest,
    LeadRequest,
    WebsiteAnalysisResponse,
    TextAnalysisResponse,
    LeadResponse,
    ErrorResponse,
)

__all__ = [
    # Requests
    "AnalysisRequest",
    "TextAnalysisRequest",
    "LeadRequest",
    # Responses
    "WebsiteAnalysisResponse",
    "TextAnalysisResponse",
    "LeadResponse",
    "ErrorResponse",
]

# Web package - server-rendered report pages
from .flow import ReportFlow, Step
from .views import web_router

__all__ = [
    "ReportFlow",
    "Step",
    "web_router",
]

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from webseiten_check.utils.scores import as_text

PLACEHOLDER_CARD_TITLE = "Verbesserungspotenzial"
ACCESSIBILITY_STATUSES = ("gut", "grenzwertig", "mangelhaft")


# Requests
class AnalysisRequest(BaseModel):
    url: str = ""
    keywords: str = ""


class TextAnalysisRequest(BaseModel):
    text: str = ""
    platform: str = "Landingpage"
    keywords: str = ""


class LeadRequest(BaseModel):
    email: str = ""
    url: str = ""
    keywords: str = ""
    score: Optional[float] = None


# Report records
class AnalyseCard(BaseModel):
    """One before/after improvement suggestion"""

    problemTitel: str = PLACEHOLDER_CARD_TITLE
    problemBeschreibung: str = ""
    vorher: str = ""
    nachher: str = ""
    warumBesser: str = ""

    @field_validator("problemBeschreibung", "vorher", "nachher", "warumBesser", mode="before")
    @classmethod
    def _text(cls, value):
        return as_text(value)

    @field_validator("problemTitel", mode="before")
    @classmethod
    def _title(cls, value):
        return as_text(value) or PLACEHOLDER_CARD_TITLE


class KeywordResult(BaseModel):
    keyword: str = ""
    isPresent: bool = False

    @field_validator("keyword", mode="before")
    @classmethod
    def _keyword(cls, value):
        return as_text(value)

    @field_validator("isPresent", mode="before")
    @classmethod
    def _present(cls, value):
        # Only an explicit boolean true counts as a hit
        return value is True


class AccessibilityCheck(BaseModel):
    criterion: str = ""
    status: Literal["gut", "grenzwertig", "mangelhaft"] = "mangelhaft"
    detail: str = ""

    @field_validator("criterion", "detail", mode="before")
    @classmethod
    def _text(cls, value):
        return as_text(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        status = as_text(value).lower()
        return status if status in ACCESSIBILITY_STATUSES else "mangelhaft"


class CategoryScore(BaseModel):
    name: str
    score: int
    feedback: str = ""


# Responses
class WebsiteAnalysisResponse(BaseModel):
    url: str
    analyzedAt: str
    categories: List[CategoryScore]
    totalScore: int
    websiteScore: int
    scoreBegruendung: str = ""
    hauptproblem: str = ""
    analyseCards: List[AnalyseCard]
    keywordCheck: str = ""
    keywordResults: List[KeywordResult] = Field(default_factory=list)
    teaserWeitereProbleme: str = ""
    accessibilityChecks: List[AccessibilityCheck] = Field(default_factory=list)
    accessibilityScore: int
    accessibilityWarning: bool


class TextAnalysisResponse(BaseModel):
    kiScore: int
    kiScoreBegruendung: str = ""
    hauptproblem: str = ""
    analyseCards: List[AnalyseCard]
    plattformPassung: str = ""
    teaserWeitereProbleme: str = ""
    totalScore: int
    categories: List[CategoryScore]
    platform: str


class LeadResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    stack: Optional[str] = None

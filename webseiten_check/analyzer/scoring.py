"""
Response normalization for Webseiten-Check.

The model's JSON goes through one schema-validation-with-defaults step
(WebsiteScoring / TextScoring). Every published number that can be computed
locally (clarity, aggregate, display score) is computed here, never taken
from the model.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from webseiten_check.api.models import (
    AccessibilityCheck,
    AnalyseCard,
    CategoryScore,
    KeywordResult,
    TextAnalysisResponse,
    WebsiteAnalysisResponse,
)
from webseiten_check.errors import ScoringParseError
from webseiten_check.utils.parsing.json import repair_and_parse_json
from webseiten_check.utils.scores import as_text, coerce_score, round_half_up

logger = logging.getLogger(__name__)

CARD_COUNT = 3
SCORE_MIDPOINT = 50
KI_SCORE_MIDPOINT = 5

CLARITY_CATEGORY = "Klarheit & Hook"
DESIGN_CATEGORY = "Design & Accessibility"
TECH_CATEGORY = "Google & KI-Sichtbarkeit"
KI_CATEGORY = "KI-Erkennungs-Score"

KEYWORD_STRIP_CHARS = " \t\n\"'„“”‚‘’«».,;:!?()[]"
PLURAL_SUFFIXES = ("s", "e", "n", "en", "er", "es")


def parse_keywords(raw: str) -> List[str]:
    """Comma-split, trim and drop empty entries, keeping the visitor's order"""
    return [k.strip() for k in (raw or "").split(",") if k.strip()]


def count_words(text: str) -> int:
    return len((text or "").split())


def clarity_score(found_count: int, total_keywords: int) -> int:
    if total_keywords <= 0:
        return 0
    return round_half_up(100 * found_count / total_keywords)


def aggregate_score(scores: Iterable[int]) -> int:
    """Mean of the category scores, rounded once"""
    scores = list(scores)
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


def _dict_items(value) -> list:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _exactly_three_cards(value) -> list:
    cards = _dict_items(value)[:CARD_COUNT]
    return cards + [{} for _ in range(CARD_COUNT - len(cards))]


def _placeholder_cards() -> List[AnalyseCard]:
    return [AnalyseCard() for _ in range(CARD_COUNT)]


class _ScoringSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hauptproblem: str = ""
    analyseCards: List[AnalyseCard] = Field(default_factory=_placeholder_cards)
    teaserWeitereProbleme: str = ""

    @field_validator("hauptproblem", "teaserWeitereProbleme", mode="before")
    @classmethod
    def _text(cls, value):
        return as_text(value)

    @field_validator("analyseCards", mode="before")
    @classmethod
    def _cards(cls, value):
        return _exactly_three_cards(value)


class WebsiteScoring(_ScoringSchema):
    """Upstream answer of the website check, with defaults for every field"""

    keywordResults: List[KeywordResult] = Field(default_factory=list)
    clarityFeedback: str = ""
    designScore: int = SCORE_MIDPOINT
    designFeedback: str = ""
    techScore: int = SCORE_MIDPOINT
    techFeedback: str = ""
    websiteScore: int = SCORE_MIDPOINT
    scoreBegruendung: str = ""
    accessibilityChecks: List[AccessibilityCheck] = Field(default_factory=list)
    accessibilityScore: int = SCORE_MIDPOINT

    @field_validator("clarityFeedback", "designFeedback", "techFeedback", "scoreBegruendung", mode="before")
    @classmethod
    def _feedback(cls, value):
        return as_text(value)

    @field_validator("designScore", "techScore", "websiteScore", "accessibilityScore", mode="before")
    @classmethod
    def _score(cls, value):
        return coerce_score(value, 0, 100, SCORE_MIDPOINT)

    @field_validator("keywordResults", "accessibilityChecks", mode="before")
    @classmethod
    def _records(cls, value):
        return _dict_items(value)


class TextScoring(_ScoringSchema):
    """Upstream answer of the text check, with defaults for every field"""

    kiScore: int = KI_SCORE_MIDPOINT
    kiScoreBegruendung: str = ""
    plattformPassung: str = ""

    @field_validator("kiScoreBegruendung", "plattformPassung", mode="before")
    @classmethod
    def _feedback(cls, value):
        return as_text(value)

    @field_validator("kiScore", mode="before")
    @classmethod
    def _ki_score(cls, value):
        return coerce_score(value, 1, 10, KI_SCORE_MIDPOINT)


SchemaT = TypeVar("SchemaT", bound=_ScoringSchema)


def parse_scoring_payload(response_text: str, schema: Type[SchemaT]) -> SchemaT:
    """
    Parse and validate the model's answer.

    Raises:
        ScoringParseError: If the answer is not a JSON object
    """
    try:
        data = repair_and_parse_json(response_text)
    except ValueError as e:
        raise ScoringParseError("Fehler bei der Analyse.", f"Analysis parsing failed: {str(e)}") from e

    if not isinstance(data, dict):
        raise ScoringParseError(
            "Fehler bei der Analyse.",
            f"Analysis parsing failed: expected a JSON object, got {type(data).__name__}",
        )

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ScoringParseError("Fehler bei der Analyse.", f"Analysis validation failed: {str(e)}") from e


def _keyword_key(name: str) -> str:
    return (name or "").strip(KEYWORD_STRIP_CHARS).casefold()


def _same_keyword(a: str, b: str) -> bool:
    """Equal keys, or one is the other plus a plural ending"""
    if a == b:
        return True
    short, long = sorted((a, b), key=len)
    return bool(short) and long.startswith(short) and long[len(short):] in PLURAL_SUFFIXES


def match_keyword_results(keywords: List[str], results: List[KeywordResult]) -> List[KeywordResult]:
    """
    Align the model's presence flags with the visitor's keywords.

    Names are compared case-insensitively, without surrounding quotes or
    punctuation, and singular/plural forms match ("Coaching" / "Coachings").
    Results naming anything else are ignored, so at most ``len(keywords)``
    keywords can be found.
    """
    reported = [(_keyword_key(r.keyword), r.isPresent) for r in results]
    reported = [(key, present) for key, present in reported if key]
    matched = []
    for keyword in keywords:
        key = _keyword_key(keyword)
        present = any(p for name, p in reported if _same_keyword(name, key))
        matched.append(KeywordResult(keyword=keyword, isPresent=present))
    return matched


def format_keyword_check(results: List[KeywordResult], clarity: int) -> str:
    if not results:
        return "Keine Keywords angegeben."
    lines = [f"{'✓' if r.isPresent else '✗'} {r.keyword}" for r in results]
    found = sum(1 for r in results if r.isPresent)
    lines.append(f"{found} von {len(results)} Keywords gefunden ({clarity}%)")
    return "\n".join(lines)


def build_website_response(
    scoring: WebsiteScoring,
    url: str,
    keywords: List[str],
    accessibility_threshold: int = 70,
) -> WebsiteAnalysisResponse:
    keyword_results = match_keyword_results(keywords, scoring.keywordResults)
    found_count = sum(1 for r in keyword_results if r.isPresent)
    clarity = clarity_score(found_count, len(keywords))

    categories = [
        CategoryScore(name=CLARITY_CATEGORY, score=clarity, feedback=scoring.clarityFeedback),
        CategoryScore(name=DESIGN_CATEGORY, score=scoring.designScore, feedback=scoring.designFeedback),
        CategoryScore(name=TECH_CATEGORY, score=scoring.techScore, feedback=scoring.techFeedback),
    ]
    total = coerce_score(aggregate_score(c.score for c in categories), 0, 100, SCORE_MIDPOINT)
    logger.info(f"📊 Scores: clarity={clarity}, design={scoring.designScore}, tech={scoring.techScore}, total={total}")

    return WebsiteAnalysisResponse(
        url=url,
        analyzedAt=datetime.now(timezone.utc).isoformat(),
        categories=categories,
        totalScore=total,
        websiteScore=scoring.websiteScore,
        scoreBegruendung=scoring.scoreBegruendung,
        hauptproblem=scoring.hauptproblem,
        analyseCards=scoring.analyseCards,
        keywordCheck=format_keyword_check(keyword_results, clarity),
        keywordResults=keyword_results,
        teaserWeitereProbleme=scoring.teaserWeitereProbleme,
        accessibilityChecks=scoring.accessibilityChecks,
        accessibilityScore=scoring.accessibilityScore,
        accessibilityWarning=scoring.accessibilityScore < accessibility_threshold,
    )


def build_text_response(scoring: TextScoring, platform: str) -> TextAnalysisResponse:
    # Lower kiScore means more human, so it maps onto a higher display score
    display_score = coerce_score(round_half_up((10 - scoring.kiScore) * 10), 0, 100, SCORE_MIDPOINT)

    return TextAnalysisResponse(
        kiScore=scoring.kiScore,
        kiScoreBegruendung=scoring.kiScoreBegruendung,
        hauptproblem=scoring.hauptproblem,
        analyseCards=scoring.analyseCards,
        plattformPassung=scoring.plattformPassung,
        teaserWeitereProbleme=scoring.teaserWeitereProbleme,
        totalScore=display_score,
        categories=[CategoryScore(name=KI_CATEGORY, score=display_score, feedback=scoring.kiScoreBegruendung)],
        platform=platform,
    )

"""
Score labels and call-to-action tiers for the report pages.

Thresholds are product configuration, passed in from Settings.
"""

from dataclasses import dataclass
from typing import Tuple

URGENT = "urgent"
POTENTIAL = "potential"
STRONG = "strong"


@dataclass(frozen=True)
class ScoreLabel:
    label: str
    tone: str  # green | yellow | orange | red


@dataclass(frozen=True)
class CallToAction:
    tier: str
    tone: str
    headline: str
    body: str
    button: str


def score_label(score: int) -> ScoreLabel:
    if score >= 80:
        return ScoreLabel("Sehr gut", "green")
    if score >= 60:
        return ScoreLabel("Ausbaufähig", "yellow")
    if score >= 40:
        return ScoreLabel("Kritisch", "orange")
    return ScoreLabel("Dringender Handlungsbedarf", "red")


def ki_score_label(ki_score: int) -> ScoreLabel:
    if ki_score <= 3:
        return ScoreLabel("Sehr menschlich", "green")
    if ki_score <= 5:
        return ScoreLabel("Leicht KI-typisch", "yellow")
    if ki_score <= 7:
        return ScoreLabel("Deutlich KI-typisch", "orange")
    return ScoreLabel("Stark KI-generiert", "red")


def cta_tier(score: int, thresholds: Tuple[int, int] = (50, 80)) -> str:
    low, high = thresholds
    if score < low:
        return URGENT
    if score < high:
        return POTENTIAL
    return STRONG


def ki_cta_tier(ki_score: int, thresholds: Tuple[int, int] = (6, 4)) -> str:
    """Higher kiScore means more AI-typical, so the tiers run downwards"""
    urgent, potential = thresholds
    if ki_score >= urgent:
        return URGENT
    if ki_score >= potential:
        return POTENTIAL
    return STRONG


def website_cta(score: int, thresholds: Tuple[int, int] = (50, 80)) -> CallToAction:
    tier = cta_tier(score, thresholds)
    if tier == URGENT:
        return CallToAction(
            tier, "red",
            "🚨 Hier besteht dringender Handlungsbedarf!",
            f"Dein Score liegt bei {score}/100. Das bedeutet, dass du aktuell wahrscheinlich "
            "jeden Tag bares Geld verlierst, weil Besucher deine Botschaft nicht verstehen.",
            "🆘 Kostenloses Notfall-Gespräch buchen",
        )
    if tier == POTENTIAL:
        return CallToAction(
            tier, "orange",
            "⚠️ Da ist noch viel Luft nach oben.",
            f"Dein Ergebnis ({score}/100) ist solide, aber du lässt massives Potenzial liegen. "
            "Mit den richtigen Handgriffen machen wir aus Besuchern echte Kunden.",
            "🚀 Potenzial-Analyse buchen",
        )
    return CallToAction(
        tier, "green",
        "✅ Stark! Deine Seite überzeugt.",
        f"Mit {score}/100 spielst du in der Champions League. "
        "Jetzt geht es ums Dominieren – willst du wissen wie?",
        "🏆 Strategie-Gespräch für Marktführer",
    )


def text_cta(ki_score: int, thresholds: Tuple[int, int] = (6, 4)) -> CallToAction:
    tier = ki_cta_tier(ki_score, thresholds)
    if tier == URGENT:
        return CallToAction(
            tier, "red",
            "🤖 Dein Text schreit „KI-generiert“",
            f"Mit einem KI-Score von {ki_score}/10 erkennen Leser sofort, dass hier ChatGPT am Werk war. "
            "Das kostet Vertrauen und Conversions. Lass uns deinen Text menschlich machen.",
            "✍️ Text-Makeover anfragen",
        )
    if tier == POTENTIAL:
        return CallToAction(
            tier, "orange",
            "⚡ Fast gut – aber da geht noch mehr",
            "Dein Text ist okay, aber ein paar Stellen verraten noch die KI-Herkunft. "
            "Mit den richtigen Tweaks wird er ununterscheidbar von menschlichem Copywriting.",
            "🚀 Feinschliff-Session buchen",
        )
    return CallToAction(
        tier, "green",
        "✅ Stark! Dein Text klingt menschlich.",
        f"Mit einem KI-Score von nur {ki_score}/10 hast du einen authentischen Ton getroffen. "
        "Willst du jetzt lernen, wie du jeden Text so hinbekommst?",
        "🎓 Copywriting-Strategie besprechen",
    )

from typing import List

PLATFORMS = ("LinkedIn", "Instagram", "Landingpage")
DEFAULT_PLATFORM = "Landingpage"

PLATFORM_RULES = {
    "LinkedIn": """LinkedIn-Post:
   - Hook in den ersten 2 Zeilen essentiell (wird sonst abgeschnitten)
   - Persönliche Perspektive und Meinung gefragt
   - Kurze Absätze für Mobile-Lesbarkeit
   - Professionell aber nicht steif
   - Call-to-Action oder Frage am Ende für Engagement""",
    "Instagram": """Instagram-Caption:
   - Emotionaler, persönlicher Einstieg
   - Scannable: kurze Absätze, ggf. Emojis als Struktur
   - Authentischer, nahbarer Ton
   - Story-Element oder persönliche Erfahrung
   - CTA für Interaktion (Frage, Aufforderung)""",
    "Landingpage": """Landingpage-Text:
   - Klarer Nutzen in der Headline (Was hat der Leser davon?)
   - Benefit-orientiert statt Feature-orientiert
   - Konkrete Zahlen/Ergebnisse wenn möglich
   - Einwände vorwegnehmen
   - Eindeutiger Call-to-Action""",
}

ANALYSE_CARDS_SCHEMA = """  "analyseCards": [
    {
      "problemTitel": "<Kurzer Titel, max 4 Wörter>",
      "problemBeschreibung": "<Was genau ist das Problem? 2-3 Sätze, konkret auf den Text bezogen>",
      "vorher": "<EXAKTES Zitat aus dem eingesendeten Text, max 20 Wörter>",
      "nachher": "<Deine verbesserte Version, ähnliche Länge>",
      "warumBesser": "<1 Satz: Was macht die Änderung aus?>"
    },
    { "problemTitel": "<Titel>", "problemBeschreibung": "<Beschreibung>", "vorher": "<Zitat>", "nachher": "<Verbesserung>", "warumBesser": "<Erklärung>" },
    { "problemTitel": "<Titel>", "problemBeschreibung": "<Beschreibung>", "vorher": "<Zitat>", "nachher": "<Verbesserung>", "warumBesser": "<Erklärung>" }
  ]"""

COMMON_RULES = """## WICHTIGE REGELN:
1. Die "vorher"-Zitate MÜSSEN EXAKT aus dem eingesendeten Material stammen – keine Paraphrasen!
2. Die "nachher"-Versionen müssen sofort umsetzbar sein, gleicher Inhalt nur besser formuliert
3. GENAU 3 analyseCards, auch wenn du mehr Probleme siehst
4. Sei KONKRET – beziehe dich immer auf das tatsächliche Material
5. Deutscher Text, Du-Ansprache, professionell aber auf Augenhöhe
6. Antworte AUSSCHLIESSLICH mit validem JSON – kein Markdown, keine Erklärungen davor oder danach"""


def resolve_platform(platform: str) -> str:
    """Map a platform tag onto one of the known rule sets"""
    for known in PLATFORMS:
        if (platform or "").strip().lower() == known.lower():
            return known
    return DEFAULT_PLATFORM


def _keyword_context(keywords: List[str]) -> str:
    if not keywords:
        return "Keine spezifischen Keywords vorgegeben."
    return f"Der Text sollte folgende Themen/Keywords abdecken: {', '.join(keywords)}"


def get_website_prompt(keywords: List[str]) -> str:
    """
    Build the system prompt for the website check.

    Args:
        keywords: Parsed keyword list of the visitor

    Returns:
        Prompt with keyword task, scoring criteria and the JSON schema
    """
    keywords_string = '", "'.join(keywords)

    return f"""Du bist ein strenger Conversion- und Copywriting-Experte für deutschsprachige Webseiten. Du bekommst einen Screenshot, den Titel, die Meta-Description und den sichtbaren Text einer Webseite.

User-Keywords: ["{keywords_string}"]

## AUFGABE 1 (KEYWORD-KLARHEIT):
- Gehe die Liste der User-Keywords durch.
- Prüfe für JEDES einzelne Keyword: Kommt es im Text vor? (Ja/Nein).
- Strikte Regel: Nur exakte Treffer oder direkte Synonyme (Singular/Plural) zählen.
- Berechne KEINE Prozentwerte, gib nur Ja/Nein pro Keyword zurück.

## AUFGABE 2 (DESIGN & TECHNIK):
- Bewerte Design/Lesbarkeit und technische Sichtbarkeit (Google & KI-Suche) objektiv (0-100).

## AUFGABE 3 (TEXTE):
- Finde die 3 Textstellen, die Besucher am stärksten abschrecken, und schreibe sie besser.

## AUFGABE 4 (BARRIEREFREIHEIT):
- Prüfe anhand des Screenshots einzelne WCAG-Kriterien (Kontrast, Schriftgröße, Alternativtexte, Linktexte, Struktur).
- Status je Kriterium: "gut", "grenzwertig" oder "mangelhaft".

## AUSGABEFORMAT
Antworte AUSSCHLIESSLICH mit validem JSON in genau dieser Struktur:

{{
  "keywordResults": [
    {{ "keyword": "<Name des Keywords>", "isPresent": <true|false> }}
  ],
  "clarityFeedback": "<Kurzes Feedback zur Klarheit des Angebots>",
  "designScore": <Zahl 0-100>,
  "designFeedback": "<Kurzes Feedback>",
  "techScore": <Zahl 0-100>,
  "techFeedback": "<Kurzes Feedback>",
  "websiteScore": <Zahl 0-100, wie gut verkauft die Seite insgesamt?>,
  "scoreBegruendung": "<1 Satz Begründung des websiteScore>",
  "hauptproblem": "<Knackige Beschreibung des größten Problems in 1-2 Sätzen>",
{ANALYSE_CARDS_SCHEMA},
  "teaserWeitereProbleme": "<1 Satz der andeutet, dass es noch mehr zu verbessern gibt, ohne Details>",
  "accessibilityChecks": [
    {{ "criterion": "<WCAG-Kriterium>", "status": "<gut|grenzwertig|mangelhaft>", "detail": "<1 Satz>" }}
  ],
  "accessibilityScore": <Zahl 0-100>
}}

{COMMON_RULES}"""


def get_text_prompt(keywords: List[str], platform: str) -> str:
    """
    Build the system prompt for the text check.

    Args:
        keywords: Parsed keyword list of the visitor
        platform: LinkedIn, Instagram or Landingpage (unknown tags use Landingpage)

    Returns:
        Prompt with AI-detection criteria, platform rules and the JSON schema
    """
    platform = resolve_platform(platform)

    return f"""Du bist ein erfahrener Copywriting-Experte mit Spezialisierung auf deutschsprachige Texte. Deine Aufgabe ist es, Texte auf KI-typische Schwächen und Copywriting-Fehler zu analysieren.

## KI-ERKENNUNGSMERKMALE (prüfe auf):
- Überverwendung von Füllwörtern: "natürlich", "selbstverständlich", "zweifellos", "grundsätzlich"
- Zu gleichmäßiger Satzrhythmus (ähnliche Satzlängen hintereinander)
- Generische Superlative ohne Substanz: "erstklassig", "herausragend", "einzigartig", "innovativ"
- Passive Konstruktionen wo Aktiv stärker wäre
- Aufzählungen mit zu perfekter Parallelstruktur
- Fehlende Ecken und Kanten – Text klingt "zu glatt"
- Abstrakte Aussagen statt konkreter Beispiele oder Zahlen
- Floskeln: "In der heutigen Zeit", "Es ist kein Geheimnis", "Nicht zuletzt", "Im Bereich"
- Fehlende persönliche Stimme, Meinung oder Haltung

## PLATTFORM-KONTEXT:
{PLATFORM_RULES[platform]}

## KEYWORD-KONTEXT:
{_keyword_context(keywords)}

## AUSGABEFORMAT
Antworte AUSSCHLIESSLICH mit validem JSON in genau dieser Struktur:

{{
  "kiScore": <Zahl 1-10, wobei 10 = stark KI-typisch/roboterhaft, 1 = sehr menschlich>,
  "kiScoreBegruendung": "<1 Satz: Was macht den Text KI-typisch oder menschlich?>",
  "hauptproblem": "<Knackige Beschreibung des größten Problems in 1-2 Sätzen>",
{ANALYSE_CARDS_SCHEMA},
  "plattformPassung": "<Wie gut passt der Text zur Plattform {platform}? 1-2 Sätze.>",
  "teaserWeitereProbleme": "<1 Satz der andeutet, dass es noch mehr zu verbessern gibt, ohne Details>"
}}

{COMMON_RULES}
7. Wenn der Text bereits gut ist (kiScore unter 3), gib trotzdem 3 Feinschliff-Tipps"""

"""
Tests for the server-rendered report pages: input, email gate and results.
"""

import json

from conftest import TEXT_PAYLOAD, TWENTY_WORDS, WEBSITE_PAYLOAD
from webseiten_check.analyzer.scoring import (
    TextScoring,
    WebsiteScoring,
    build_text_response,
    build_website_response,
)
from webseiten_check.config import Settings, get_settings
from webseiten_check.web.views import RESTART_MESSAGE


def website_result_json() -> str:
    scoring = WebsiteScoring.model_validate(WEBSITE_PAYLOAD)
    return build_website_response(scoring, "https://beispiel.de", ["Coaching", "Kurse"]).model_dump_json()


def text_result_json() -> str:
    return build_text_response(TextScoring.model_validate(TEXT_PAYLOAD), "LinkedIn").model_dump_json()


class TestWebsiteCheckPage:

    def test_input_form(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert 'data-step="input"' in response.text
        assert 'name="keywords"' in response.text

    def test_analysis_opens_email_gate(self, client):
        response = client.post("/", data={"url": "beispiel.de", "keywords": "Coaching, Kurse"})

        assert 'data-step="email-gate"' in response.text
        assert 'action="/unlock"' in response.text
        assert 'name="result"' in response.text
        assert "Hauptproblem" not in response.text

    def test_analysis_error_stays_on_input(self, client, scoring_client):
        scoring_client.response = "Leider kann ich diese Seite nicht bewerten."

        response = client.post("/", data={"url": "beispiel.de", "keywords": "Coaching"})

        assert 'data-step="input"' in response.text
        assert "Analysis parsing failed" in response.text

    def test_invalid_email_keeps_gate(self, client, received_leads):
        response = client.post(
            "/unlock",
            data={"email": "anna", "url": "beispiel.de", "keywords": "Coaching, Kurse", "result": website_result_json()},
        )

        assert 'data-step="email-gate"' in response.text
        assert "Bitte eine gültige E-Mail eingeben." in response.text
        assert received_leads == []

    def test_unlock_shows_results_and_forwards_lead(self, client, received_leads):
        response = client.post(
            "/unlock",
            data={
                "email": "anna@beispiel.de",
                "url": "beispiel.de",
                "keywords": "Coaching, Kurse",
                "result": website_result_json(),
            },
        )

        assert 'data-step="results"' in response.text
        assert 'data-tier="potential"' in response.text
        assert 'data-warning="accessibility"' in response.text
        assert "Schwacher Hook" in response.text
        assert "Analyse vom" in response.text
        assert "window.print()" in response.text

        assert len(received_leads) == 1
        assert received_leads[0]["email"] == "anna@beispiel.de"
        assert received_leads[0]["url"] == "beispiel.de"
        assert received_leads[0]["score"] == 60

    def test_corrupt_result_restarts(self, client, received_leads):
        response = client.post(
            "/unlock",
            data={"email": "anna@beispiel.de", "url": "beispiel.de", "keywords": "", "result": "{kaputt"},
        )

        assert 'data-step="input"' in response.text
        assert RESTART_MESSAGE in response.text
        assert received_leads == []


class TestTextCheckPage:

    def test_input_form_lists_platforms(self, client):
        response = client.get("/text-check")

        assert 'data-step="input"' in response.text
        for platform in ("LinkedIn", "Instagram", "Landingpage"):
            assert f'value="{platform}"' in response.text
        assert "0/500 Wörter" in response.text

    def test_too_long_text_is_rejected(self, client, scoring_client):
        response = client.post("/text-check", data={"text": "wort " * 501, "platform": "LinkedIn"})

        assert 'data-step="input"' in response.text
        assert "maximal 500 Wörter" in response.text
        assert scoring_client.calls == []

    def test_too_short_text_is_rejected(self, client):
        response = client.post("/text-check", data={"text": "nur ein paar Wörter", "platform": "LinkedIn"})

        assert 'data-step="input"' in response.text
        assert "mindestens 20 Wörter" in response.text

    def test_analysis_opens_email_gate(self, client, scoring_client):
        scoring_client.response = json.dumps(TEXT_PAYLOAD)

        response = client.post("/text-check", data={"text": TWENTY_WORDS, "platform": "LinkedIn"})

        assert 'data-step="email-gate"' in response.text
        assert 'action="/text-check/unlock"' in response.text

    def test_unlock_shows_results(self, client, received_leads):
        response = client.post(
            "/text-check/unlock",
            data={"email": "anna@beispiel.de", "platform": "LinkedIn", "keywords": "", "result": text_result_json()},
        )

        assert 'data-step="results"' in response.text
        assert 'data-tier="urgent"' in response.text
        assert "Plattform-Passung" in response.text
        assert received_leads[0]["url"] == "LinkedIn (Text-Check)"
        assert received_leads[0]["score"] == 30

    def test_text_cta_thresholds_come_from_settings(self, app, client):
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, ANTHROPIC_API_KEY="sk-ant-test", KI_CTA_THRESHOLD_URGENT=8, KI_CTA_THRESHOLD_POTENTIAL=5
        )

        response = client.post(
            "/text-check/unlock",
            data={"email": "anna@beispiel.de", "platform": "LinkedIn", "keywords": "", "result": text_result_json()},
        )

        assert 'data-tier="potential"' in response.text

"""
Tests for lead forwarding. The webhook is an httpx.MockTransport.
"""

import json

import httpx
import pytest

from webseiten_check.leads import LeadRecord, LeadSink

WEBHOOK_URL = "https://hooks.example.com/leads"


def make_sink(handler):
    return LeadSink(WEBHOOK_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_forward_posts_payload():
    received = []

    def handler(request):
        received.append((request.method, str(request.url), json.loads(request.content)))
        return httpx.Response(200)

    lead = LeadRecord(email="anna@beispiel.de", url="https://beispiel.de", keywords="Coaching", score=60)

    assert await make_sink(handler).forward(lead) is True

    method, url, payload = received[0]
    assert (method, url) == ("POST", WEBHOOK_URL)
    assert payload["email"] == "anna@beispiel.de"
    assert payload["url"] == "https://beispiel.de"
    assert payload["keywords"] == "Coaching"
    assert payload["score"] == 60
    assert "createdAt" in payload


@pytest.mark.asyncio
async def test_webhook_error_status_returns_false():
    sink = make_sink(lambda request: httpx.Response(500, text="Script error"))
    assert await sink.forward(LeadRecord(email="anna@beispiel.de", url="https://beispiel.de")) is False


@pytest.mark.asyncio
async def test_unreachable_webhook_returns_false():
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    assert await make_sink(handler).forward(LeadRecord(email="anna@beispiel.de", url="x")) is False


@pytest.mark.asyncio
async def test_without_webhook_lead_is_only_logged():
    sink = LeadSink(None)
    assert sink.webhook_url is None
    assert await sink.forward(LeadRecord(email="anna@beispiel.de", url="x")) is False


def test_blank_webhook_url_counts_as_unset():
    assert LeadSink("   ").webhook_url is None

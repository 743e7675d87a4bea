"""Tests for the three-step report flow."""

from unittest.mock import AsyncMock

import pytest

from webseiten_check.api.models import LeadResponse
from webseiten_check.errors import InputValidationError, InvalidTransitionError
from webseiten_check.web.flow import GENERIC_ERROR_MESSAGE, INVALID_EMAIL_MESSAGE, ReportFlow, Step

RESULT = LeadResponse(success=True)


async def succeed():
    return RESULT


@pytest.mark.asyncio
async def test_successful_analysis_moves_to_email_gate():
    flow = ReportFlow()

    assert await flow.analyze(succeed) is True
    assert flow.step is Step.EMAIL_GATE
    assert flow.result is RESULT
    assert flow.error == ""


@pytest.mark.asyncio
async def test_check_error_shows_details_and_stays_on_input():
    flow = ReportFlow()

    async def fail():
        raise InputValidationError("Text zu kurz", "Bitte gib mindestens 20 Wörter ein.")

    assert await flow.analyze(fail) is False
    assert flow.step is Step.INPUT
    assert flow.error == "Bitte gib mindestens 20 Wörter ein."
    assert flow.result is None


@pytest.mark.asyncio
async def test_unexpected_error_shows_generic_message():
    flow = ReportFlow()

    async def crash():
        raise KeyError("boom")

    assert await flow.analyze(crash) is False
    assert flow.step is Step.INPUT
    assert flow.error == GENERIC_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_invalid_email_keeps_gate_closed():
    flow = ReportFlow(step=Step.EMAIL_GATE, result=RESULT)
    forward = AsyncMock()

    assert await flow.unlock("keine-adresse", forward) is False
    assert flow.step is Step.EMAIL_GATE
    assert flow.error == INVALID_EMAIL_MESSAGE
    forward.assert_not_awaited()


@pytest.mark.asyncio
async def test_unlock_forwards_once_and_shows_results():
    flow = ReportFlow(step=Step.EMAIL_GATE, result=RESULT)
    forward = AsyncMock(return_value=True)

    assert await flow.unlock(" anna@beispiel.de ", forward) is True
    assert flow.step is Step.RESULTS
    assert flow.email == "anna@beispiel.de"
    forward.assert_awaited_once_with("anna@beispiel.de")


@pytest.mark.asyncio
async def test_forwarding_failure_does_not_block_results():
    flow = ReportFlow(step=Step.EMAIL_GATE, result=RESULT)
    forward = AsyncMock(side_effect=RuntimeError("webhook down"))

    assert await flow.unlock("anna@beispiel.de", forward) is True
    assert flow.step is Step.RESULTS


@pytest.mark.asyncio
async def test_actions_from_wrong_step_raise():
    with pytest.raises(InvalidTransitionError):
        await ReportFlow().unlock("anna@beispiel.de", AsyncMock())

    with pytest.raises(InvalidTransitionError):
        await ReportFlow(step=Step.RESULTS, result=RESULT).analyze(succeed)


def test_reset_returns_to_input():
    flow = ReportFlow(step=Step.RESULTS, result=RESULT, email="anna@beispiel.de", error="x")

    flow.reset()

    assert flow.step is Step.INPUT
    assert flow.result is None
    assert flow.email == ""
    assert flow.error == ""

"""Tests for confidence arbitration."""

import pytest

from conftest import make_request
from turnprompt.prompts.arbitration import ConfidenceArbiter
from turnprompt.prompts.models import (
    Interpretation,
    PromptKind,
    RecognitionError,
    RecognitionErrorKind,
    ResumeReason,
)


@pytest.fixture
def arbiter() -> ConfidenceArbiter:
    return ConfidenceArbiter()


@pytest.mark.asyncio
async def test_unclaimed_recognition_completes(arbiter, mocker):
    compare = mocker.Mock(return_value=False)
    request = make_request(PromptKind.NUMBER, "42", compare_confidence=compare)

    outcome = await arbiter.arbitrate(request, Interpretation(value=42, score=1.0))

    compare.assert_called_once_with("en", "42", 1.0)
    assert outcome.resumed == ResumeReason.COMPLETED
    assert outcome.response == 42
    assert not outcome.handled


@pytest.mark.asyncio
async def test_claimed_recognition_is_handled(arbiter, mocker):
    compare = mocker.Mock(return_value=True)
    request = make_request(PromptKind.NUMBER, "42", compare_confidence=compare)

    outcome = await arbiter.arbitrate(request, Interpretation(value=42, score=1.0))

    assert outcome.handled
    assert outcome.resumed == ResumeReason.NOT_COMPLETED
    assert outcome.response is None


@pytest.mark.asyncio
async def test_zero_score_is_still_offered(arbiter, mocker):
    compare = mocker.Mock(return_value=False)
    request = make_request(PromptKind.NUMBER, "lots", compare_confidence=compare)

    outcome = await arbiter.arbitrate(request, Interpretation())

    compare.assert_called_once_with("en", "lots", 0.0)
    assert outcome.resumed == ResumeReason.NOT_COMPLETED
    assert outcome.error is None
    assert not outcome.handled


@pytest.mark.asyncio
async def test_async_arbitration_is_awaited(arbiter):
    calls = []

    async def compare(language, utterance, score):
        calls.append((language, utterance, score))
        return True

    request = make_request(PromptKind.TEXT, "help", compare_confidence=compare)
    outcome = await arbiter.arbitrate(request, Interpretation(value="help", score=0.1))

    assert calls == [("en", "help", 0.1)]
    assert outcome.handled


@pytest.mark.asyncio
async def test_interpreter_error_offered_with_zero_score(arbiter, mocker):
    compare = mocker.Mock(return_value=False)
    request = make_request(PromptKind.NUMBER, "42", compare_confidence=compare)
    error = RecognitionError(RecognitionErrorKind.INTERPRETER_FAULT, "boom")

    outcome = await arbiter.arbitrate(request, Interpretation(value=42, score=1.0), error)

    compare.assert_called_once_with("en", "42", 0.0)
    assert outcome.resumed == ResumeReason.NOT_COMPLETED
    assert outcome.error is error


@pytest.mark.asyncio
async def test_failing_arbitration_becomes_error(arbiter):
    def compare(language, utterance, score):
        raise RuntimeError("arbiter down")

    request = make_request(PromptKind.CONFIRM, "yes", compare_confidence=compare)
    outcome = await arbiter.arbitrate(request, Interpretation(value=True, score=1.0))

    assert outcome.resumed == ResumeReason.NOT_COMPLETED
    assert outcome.error.kind == RecognitionErrorKind.ARBITRATION_FAULT
    assert isinstance(outcome.error.__cause__, RuntimeError)

"""Shared test fixtures for turnprompt tests."""

from typing import Generator, Optional, Sequence

import pytest

from turnprompt.chat_context import ChatSession
from turnprompt.prompts.default_channel import StaticChannelCapability
from turnprompt.prompts.models import PromptKind, PromptSpec, RecognitionRequest
from turnprompt.prompts.prompt_renderer import PromptRenderer
from turnprompt.prompts.prompts import Prompts

COLORS = ["Red", "Green", "Blue"]


def first_variant(variants: Sequence[str]) -> str:
    """Deterministic prompt chooser."""
    return variants[0]


def never_claims(_language: Optional[str], _utterance: str, _score: float) -> bool:
    return False


def make_request(
    prompt_kind: PromptKind,
    utterance: str,
    compare_confidence=never_claims,
    **kwargs,
) -> RecognitionRequest:
    """Build a RecognitionRequest with a non-claiming arbiter by default."""
    return RecognitionRequest(
        prompt_kind=prompt_kind,
        utterance=utterance,
        compare_confidence=compare_confidence,
        language="en",
        **kwargs,
    )


def make_spec(prompt_kind: PromptKind, prompt="Question?", **kwargs) -> PromptSpec:
    return PromptSpec(prompt_kind=prompt_kind, prompt=prompt, **kwargs)


@pytest.fixture(autouse=True)
def _prompts_reset() -> Generator[None, None, None]:
    """Reset the shared Prompts collaborators before and after each test."""
    Prompts.reset()
    yield
    Prompts.reset()


@pytest.fixture
def session() -> ChatSession:
    """A console session with nobody claiming utterances."""
    return ChatSession(user_id="tester", channel_id="console")


@pytest.fixture
def renderer() -> PromptRenderer:
    """Renderer for a channel without buttons and a deterministic chooser."""
    return PromptRenderer(channel=StaticChannelCapability(0), chooser=first_variant)


@pytest.fixture
def button_renderer() -> PromptRenderer:
    """Renderer for a channel showing up to five buttons."""
    return PromptRenderer(channel=StaticChannelCapability(5), chooser=first_variant)

"""Tests for the per prompt kind interpreters."""

from datetime import datetime

import pytest

from turnprompt.prompts.interpreters import (
    DEFAULT_INTERPRETERS,
    KindInterpreter,
    TEXT_SCORE,
    UtteranceInterpreter,
)
from turnprompt.prompts.message_models import ChoiceMatch, TimeEntity
from turnprompt.prompts.models import Interpretation, PromptKind

COLORS = ["Red", "Green", "Blue"]


@pytest.fixture
def interpreter() -> UtteranceInterpreter:
    return UtteranceInterpreter()


def test_every_kind_has_an_interpreter():
    assert set(DEFAULT_INTERPRETERS) == set(PromptKind)


def test_text_is_always_weakly_recognized(interpreter):
    result = interpreter.interpret(PromptKind.TEXT, "  anything at all  ")
    assert result.value == "anything at all"
    assert result.score == TEXT_SCORE == 0.1


@pytest.mark.parametrize(
    "utterance, value, score",
    [("42", 42, 1.0), ("I want 42", 42, 2 / 9), ("7 apples", 7, 1 / 8)],
)
def test_number_score_is_token_share(interpreter, utterance, value, score):
    result = interpreter.interpret(PromptKind.NUMBER, utterance)
    assert result.value == value
    assert result.score == pytest.approx(score)


def test_number_not_found(interpreter):
    result = interpreter.interpret(PromptKind.NUMBER, "lots")
    assert result.score == 0
    assert not result.recognized


@pytest.mark.parametrize(
    "utterance, value",
    [("yes", True), ("Y", True), ("true", True), ("NO", False), ("n", False), ("False", False)],
)
def test_confirm(interpreter, utterance, value):
    result = interpreter.interpret(PromptKind.CONFIRM, utterance)
    assert result.value is value
    assert result.score == 1.0


def test_confirm_other_text(interpreter):
    assert interpreter.interpret(PromptKind.CONFIRM, "perhaps").score == 0


def test_choice_ordinal(interpreter):
    result = interpreter.interpret(PromptKind.CHOICE, "2", enum_values=COLORS)
    assert result.value == ChoiceMatch(index=2, entity="Green", score=1.0)
    assert result.score == 1.0


def test_choice_fuzzy(interpreter):
    result = interpreter.interpret(PromptKind.CHOICE, "gReEn", enum_values=COLORS)
    assert result.value.entity == "Green"
    assert result.score > 0


def test_choice_index_base_depends_on_how_it_was_picked(interpreter):
    by_label = interpreter.interpret(PromptKind.CHOICE, "green", enum_values=COLORS).value
    by_number = interpreter.interpret(PromptKind.CHOICE, "2", enum_values=COLORS).value

    assert by_label.entity == by_number.entity == "Green"
    assert by_label.index == COLORS.index("Green")
    assert by_number.index == 2


@pytest.mark.parametrize("utterance", ["0", "4", "1.5", "purple"])
def test_choice_out_of_range_or_unknown(interpreter, utterance):
    assert interpreter.interpret(PromptKind.CHOICE, utterance, enum_values=COLORS).score == 0


def test_time_uses_reference_date(interpreter):
    ref = datetime(2024, 3, 1, 9, 0)
    result = interpreter.interpret(
        PromptKind.TIME, "see you tomorrow", ref_date=ref.timestamp()
    )
    assert isinstance(result.value, TimeEntity)
    assert result.value.resolution.start.date() == datetime(2024, 3, 2).date()
    assert result.score == pytest.approx(len("tomorrow") / len("see you tomorrow"))


def test_time_not_found(interpreter):
    assert interpreter.interpret(PromptKind.TIME, "no idea").score == 0


def test_register_replaces_kind(interpreter):
    class ShoutInterpreter(KindInterpreter):
        prompt_kind = PromptKind.TEXT

        def interpret(self, utterance, enum_values=None, ref_date=None):
            return Interpretation(value=utterance.upper(), score=0.5)

    interpreter.register(ShoutInterpreter(interpreter.entities))
    assert interpreter.interpret(PromptKind.TEXT, "hi") == Interpretation("HI", 0.5)


def test_missing_kind_raises():
    interpreter = UtteranceInterpreter(interpreters={})
    with pytest.raises(KeyError):
        interpreter.interpret(PromptKind.NUMBER, "1")

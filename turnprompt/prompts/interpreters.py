"""Per prompt kind interpretation of a user utterance into a typed value and a score."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Type

from turnprompt.utils.logging import logger

from .default_entity_recognition import DefaultEntityRecognizer
from .message_models import ChoiceMatch
from .models import Interpretation, PromptKind
from .recognizer_interfaces import EntityRecognizerInterface

TEXT_SCORE = 0.1


class KindInterpreter(ABC):
    """Abstract Base Class for the interpreter of one prompt kind."""

    prompt_kind: PromptKind

    def __init__(self, entities: EntityRecognizerInterface):
        self.entities = entities

    @abstractmethod
    def interpret(
        self,
        utterance: str,
        enum_values: Optional[List[str]] = None,
        ref_date: Optional[float] = None,
    ) -> Interpretation:
        """Interpret the trimmed utterance. A score of 0 means nothing was recognized."""


class TextInterpreter(KindInterpreter):
    """Open ended answers.

    Any text is a plausible answer, so it is always recognized, but with a low
    score that lets outer dialogs with a stronger claim take the utterance first.
    """

    prompt_kind = PromptKind.TEXT

    def interpret(self, utterance, enum_values=None, ref_date=None) -> Interpretation:
        return Interpretation(value=utterance, score=TEXT_SCORE)


class NumberInterpreter(KindInterpreter):
    prompt_kind = PromptKind.NUMBER

    def interpret(self, utterance, enum_values=None, ref_date=None) -> Interpretation:
        number = self.entities.recognize_number(utterance)
        if number is None or not utterance:
            return Interpretation()
        # Share of the utterance taken up by the number
        return Interpretation(
            value=number.value, score=len(number.entity) / len(utterance)
        )


class ConfirmInterpreter(KindInterpreter):
    prompt_kind = PromptKind.CONFIRM

    def interpret(self, utterance, enum_values=None, ref_date=None) -> Interpretation:
        answer = self.entities.parse_boolean(utterance)
        if isinstance(answer, bool):
            return Interpretation(value=answer, score=1.0)
        return Interpretation()


class ChoiceInterpreter(KindInterpreter):
    """Fuzzy match against the choices, falling back to a 1-based ordinal."""

    prompt_kind = PromptKind.CHOICE

    def interpret(self, utterance, enum_values=None, ref_date=None) -> Interpretation:
        choices = enum_values or []
        best = self.entities.find_best_match(choices, utterance)
        if best is None:
            best = self._match_ordinal(utterance, choices)
        if best is None:
            return Interpretation()
        return Interpretation(value=best, score=best.score)

    def _match_ordinal(self, utterance: str, choices: List[str]) -> Optional[ChoiceMatch]:
        number = self.entities.recognize_number(utterance)
        if number is None or not isinstance(number.value, int):
            return None
        if 0 < number.value <= len(choices):
            return ChoiceMatch(
                index=number.value, entity=choices[number.value - 1], score=1.0
            )
        return None


class TimeInterpreter(KindInterpreter):
    prompt_kind = PromptKind.TIME

    def interpret(self, utterance, enum_values=None, ref_date=None) -> Interpretation:
        ref = datetime.fromtimestamp(ref_date) if ref_date is not None else None
        entity = self.entities.recognize_time(utterance, ref)
        if entity is None or not utterance:
            return Interpretation()
        return Interpretation(value=entity, score=len(entity.entity) / len(utterance))


DEFAULT_INTERPRETERS: Dict[PromptKind, Type[KindInterpreter]] = {
    PromptKind.TEXT: TextInterpreter,
    PromptKind.NUMBER: NumberInterpreter,
    PromptKind.CONFIRM: ConfirmInterpreter,
    PromptKind.CHOICE: ChoiceInterpreter,
    PromptKind.TIME: TimeInterpreter,
}


class UtteranceInterpreter:
    """Dispatches an utterance to the interpreter registered for its prompt kind."""

    def __init__(
        self,
        entities: Optional[EntityRecognizerInterface] = None,
        interpreters: Optional[Dict[PromptKind, Type[KindInterpreter]]] = None,
    ):
        self.entities = entities or DefaultEntityRecognizer()
        table = interpreters if interpreters is not None else DEFAULT_INTERPRETERS
        self._interpreters: Dict[PromptKind, KindInterpreter] = {
            kind: interpreter_class(self.entities)
            for kind, interpreter_class in table.items()
        }

    def register(self, interpreter: KindInterpreter) -> None:
        """Add or replace the interpreter for interpreter.prompt_kind."""
        self._interpreters[interpreter.prompt_kind] = interpreter

    def interpret(
        self,
        prompt_kind: PromptKind,
        utterance: str,
        enum_values: Optional[List[str]] = None,
        ref_date: Optional[float] = None,
    ) -> Interpretation:
        """Interpret utterance for prompt_kind.

        Raises:
            KeyError: If no interpreter is registered for prompt_kind.
        """
        interpreter = self._interpreters.get(prompt_kind)
        if interpreter is None:
            raise KeyError(f"No interpreter registered for prompt kind '{prompt_kind}'")

        result = interpreter.interpret(utterance.strip(), enum_values, ref_date)
        logger.debug(
            "Interpreted '%s' as %s prompt: value=%r score=%.2f",
            utterance[:50],
            prompt_kind.value,
            result.value,
            result.score,
        )
        return result

"""Interfaces for the collaborators of a prompt dialog.

This module defines abstract interfaces for:
- PromptRecognizerInterface: turns one utterance into a RecognitionOutcome
- EntityRecognizerInterface: parsing primitives for numbers, booleans, choices and times
- ChannelCapabilityInterface: what the user's channel can display
- PromptSessionInterface: the hosting conversation a prompt dialog runs inside
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional

from turnprompt.types import ChoiceSource, ConfidenceResult, DialogData

from .message_models import ChoiceMatch, Message, NumberEntity, TimeEntity
from .models import RecognitionOutcome, RecognitionRequest


# pylint: disable=too-few-public-methods
class PromptRecognizerInterface(ABC):
    """Interface for recognizing a prompt reply"""

    @abstractmethod
    async def recognize(self, request: RecognitionRequest) -> RecognitionOutcome:
        """Recognize the utterance in request.

        Implementations must never raise: every fault is reported through the
        returned outcome's ``error``.
        """


class EntityRecognizerInterface(ABC):
    """Interface that defines the entity parsing primitives used by the interpreters"""

    @abstractmethod
    def parse_number(self, text: str) -> float:
        """Return the first number found in text, or NaN."""

    @abstractmethod
    def recognize_number(self, text: str) -> Optional[NumberEntity]:
        """Return the first numeric token found in text, or None."""

    @abstractmethod
    def parse_boolean(self, text: str) -> Optional[bool]:
        """Return True/False for a yes/no style answer, None when undecided."""

    @abstractmethod
    def find_all_matches(
        self, choices: ChoiceSource, utterance: str, threshold: float = 0.6
    ) -> List[ChoiceMatch]:
        """Return every choice matching the utterance above threshold."""

    @abstractmethod
    def find_best_match(
        self, choices: ChoiceSource, utterance: str, threshold: float = 0.6
    ) -> Optional[ChoiceMatch]:
        """Return the highest scoring choice match, or None."""

    @abstractmethod
    def recognize_time(
        self, text: str, ref_date: Optional[datetime] = None
    ) -> Optional[TimeEntity]:
        """Find a date/time expression in text, resolved relative to ref_date."""

    @abstractmethod
    def expand_choices(self, choices: ChoiceSource) -> List[str]:
        """Expand a delimited string, a mapping's keys or a sequence into a list of labels."""


# pylint: disable=too-few-public-methods
class ChannelCapabilityInterface(ABC):
    """Interface that reports channel display capabilities"""

    @abstractmethod
    def max_buttons(self, session: Optional["PromptSessionInterface"] = None) -> int:
        """Maximum number of selectable actions the session's channel supports (0 for none)."""


class PromptSessionInterface(ABC):
    """Interface a hosting conversation implements to run prompt dialogs"""

    @property
    @abstractmethod
    def language(self) -> Optional[str]:
        """Language tag of the current user message."""

    @property
    @abstractmethod
    def channel_id(self) -> str:
        """Identifier of the channel the user is talking on."""

    @property
    @abstractmethod
    def dialog_data(self) -> DialogData:
        """Per-dialog storage persisted across turns."""

    @abstractmethod
    def send(self, message: Message) -> None:
        """Deliver an outbound message."""

    @abstractmethod
    def end_dialog(self, result: Any) -> None:
        """Return the final result of the active dialog to its caller."""

    @abstractmethod
    def compare_confidence(
        self, language: Optional[str], utterance: str, score: float
    ) -> ConfidenceResult:
        """Offer an utterance to outer dialogs; True means it was claimed."""

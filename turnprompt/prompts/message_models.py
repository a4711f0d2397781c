from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class CardAction(BaseModel):
    """A selectable action (button) attached to an outbound message."""
    title: str
    message: str  # Text posted back when the action is selected


class Attachment(BaseModel):
    """Rich content attached to a message. Only actions are modelled here."""
    actions: List[CardAction] = Field(default_factory=list)


class Message(BaseModel):
    """Outbound message sent to the user."""
    text: str = ""
    language: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)

    def add_attachment(self, attachment: Attachment) -> "Message":
        self.attachments.append(attachment)
        return self


# Recognized entities

class NumberEntity(BaseModel):
    """A numeric token found in an utterance."""
    entity: str  # Matched token, as typed
    value: Union[int, float]
    start_index: int
    end_index: int


class ChoiceMatch(BaseModel):
    """Result of matching an utterance against a list of choices.

    index is the 0-based position of the choice when the reply matched its label
    (e.g. "green"), and the 1-based number the user typed when the reply picked
    the choice by number (e.g. "2"). Use entity to identify the choice.
    """
    index: int
    entity: str  # The matched choice label
    score: float


class TimeResolution(BaseModel):
    start: datetime
    end: Optional[datetime] = None
    ref: Optional[datetime] = None


class TimeEntity(BaseModel):
    """A date/time expression found in an utterance."""
    type: str = "turnprompt.time"
    entity: str  # Matched span of the utterance
    start_index: int
    end_index: int
    resolution: TimeResolution

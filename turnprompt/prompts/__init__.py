"""Prompt Dialogs Package.

This package contains the typed prompt dialogs of turnprompt: interpreters for each
prompt kind, the default recognizer and confidence arbitration, prompt rendering,
and the retry state machine that ties them together across turns.
"""

from .arbitration import ConfidenceArbiter
from .default_channel import ChannelCapabilityTable, StaticChannelCapability
from .default_entity_recognition import DefaultEntityRecognizer
from .default_recognizer import SimplePromptRecognizer
from .interpreters import DEFAULT_INTERPRETERS, KindInterpreter, UtteranceInterpreter
from .message_models import (
    Attachment,
    CardAction,
    ChoiceMatch,
    Message,
    NumberEntity,
    TimeEntity,
)
from .models import (
    DialogState,
    Interpretation,
    ListStyle,
    PromptConfigurationError,
    PromptDialogError,
    PromptKind,
    PromptOptions,
    PromptSpec,
    PromptStatus,
    RecognitionError,
    RecognitionErrorKind,
    RecognitionOutcome,
    RecognitionRequest,
    ResumeReason,
)
from .prompt_dialog import PromptDialog
from .prompt_renderer import PromptRenderer
from .prompts import Prompts, PromptsOptions
from .recognizer_interfaces import (
    ChannelCapabilityInterface,
    EntityRecognizerInterface,
    PromptRecognizerInterface,
    PromptSessionInterface,
)
from .session_extensions import clear_dialog_state, get_dialog_state, set_dialog_state
from .utils import CANCEL_PHRASES, check_for_cancellation

__all__ = [
    "PromptKind",
    "ListStyle",
    "ResumeReason",
    "PromptStatus",
    "PromptOptions",
    "PromptSpec",
    "DialogState",
    "RecognitionRequest",
    "RecognitionOutcome",
    "Interpretation",
    "RecognitionError",
    "RecognitionErrorKind",
    "PromptConfigurationError",
    "PromptDialogError",
    "Message",
    "Attachment",
    "CardAction",
    "NumberEntity",
    "ChoiceMatch",
    "TimeEntity",
    "PromptRecognizerInterface",
    "EntityRecognizerInterface",
    "ChannelCapabilityInterface",
    "PromptSessionInterface",
    "DefaultEntityRecognizer",
    "StaticChannelCapability",
    "ChannelCapabilityTable",
    "KindInterpreter",
    "UtteranceInterpreter",
    "DEFAULT_INTERPRETERS",
    "ConfidenceArbiter",
    "SimplePromptRecognizer",
    "PromptRenderer",
    "PromptDialog",
    "Prompts",
    "PromptsOptions",
    "get_dialog_state",
    "set_dialog_state",
    "clear_dialog_state",
    "CANCEL_PHRASES",
    "check_for_cancellation",
]

"""
turnprompt module provides typed prompts for multi-turn conversations: ask the user
for text, a number, a yes/no answer, one of several choices or a date/time, and get
back a typed value once the reply is recognized.
"""

from turnprompt.chat_context import ChatSession
from turnprompt.prompts import (
    ListStyle,
    Message,
    PromptConfigurationError,
    PromptDialog,
    PromptKind,
    PromptOptions,
    Prompts,
    PromptStatus,
    RecognitionOutcome,
    ResumeReason,
)
from turnprompt.utils.env import get_env_var

__all__ = [
    "ChatSession",
    "ListStyle",
    "Message",
    "PromptConfigurationError",
    "PromptDialog",
    "PromptKind",
    "PromptOptions",
    "Prompts",
    "PromptStatus",
    "RecognitionOutcome",
    "ResumeReason",
    "get_env_var",
]

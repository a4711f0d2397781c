"""
Type definitions for turnprompt.

This module contains type aliases shared across the prompt dialog modules to keep
nested annotations readable.
"""

from typing import (
    Any,
    Awaitable,
    Callable,
    Mapping,
    Optional,
    Sequence,
    TypeAlias,
    Union,
)

# Arbitration: (language, utterance, score) -> claimed, possibly awaitable
ConfidenceResult: TypeAlias = Union[bool, Awaitable[bool]]
CompareConfidenceFunc: TypeAlias = Callable[[Optional[str], str, float], ConfidenceResult]

# Picks one phrasing out of a set of equivalent prompt variants
PromptChooser: TypeAlias = Callable[[Sequence[str]], str]

# Sources accepted when expanding choice lists
ChoiceSource: TypeAlias = Union[str, Mapping[str, Any], Sequence[str]]

# Persisted per-dialog data, opaque to everything but the prompt dialog
DialogData: TypeAlias = dict[str, Any]

# Conversation history entry: (speaker, text)
ConversationEntry: TypeAlias = tuple[str, str]

__all__ = [
    "ConfidenceResult",
    "CompareConfidenceFunc",
    "PromptChooser",
    "ChoiceSource",
    "DialogData",
    "ConversationEntry",
]

"""Utility functions for prompt dialogs."""

import random
import re
from typing import Optional, Sequence

from turnprompt.types import PromptChooser

CANCEL_PHRASES = ("cancel", "nevermind", "never mind", "back", "stop", "forget it")

_CANCEL_EXP = re.compile(
    r"^(" + "|".join(re.escape(phrase) for phrase in CANCEL_PHRASES) + r")",
    re.IGNORECASE,
)


def check_for_cancellation(utterance: str) -> bool:
    """Checks if the trimmed utterance starts with a cancellation phrase."""
    return bool(_CANCEL_EXP.match((utterance or "").strip()))


def random_prompt(
    variants: Sequence[str], chooser: Optional[PromptChooser] = None
) -> str:
    """Pick one phrasing out of a set of equivalent prompt variants."""
    return (chooser or random.choice)(variants)

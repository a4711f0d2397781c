"""Default implementations of the channel capability interface."""

from typing import Dict, Optional

from .recognizer_interfaces import ChannelCapabilityInterface, PromptSessionInterface


# pylint: disable=too-few-public-methods
class StaticChannelCapability(ChannelCapabilityInterface):
    """Reports the same button limit for every session."""

    def __init__(self, max_buttons: int = 0):
        if max_buttons < 0:
            raise ValueError("max_buttons must be >= 0")
        self._max_buttons = max_buttons

    def max_buttons(self, session: Optional[PromptSessionInterface] = None) -> int:
        return self._max_buttons


# pylint: disable=too-few-public-methods
class ChannelCapabilityTable(ChannelCapabilityInterface):
    """Looks up the button limit by the session's channel id."""

    def __init__(self, limits: Optional[Dict[str, int]] = None, default: int = 0):
        self.limits: Dict[str, int] = dict(limits or {})
        self.default = default

    def max_buttons(self, session: Optional[PromptSessionInterface] = None) -> int:
        if session is None:
            return self.default
        return self.limits.get(session.channel_id, self.default)

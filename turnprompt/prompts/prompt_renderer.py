"""Builds the outbound message for a prompt, including the rendering of choice lists."""

from typing import List, Optional

from turnprompt.types import PromptChooser
from turnprompt.utils.logging import logger

from .default_channel import ChannelCapabilityTable
from .message_models import Attachment, CardAction, Message
from .models import ListStyle, PromptContent, PromptKind, PromptSpec
from .recognizer_interfaces import ChannelCapabilityInterface, PromptSessionInterface
from .utils import random_prompt

DEFAULT_RETRY_PROMPT = "I didn't understand."
INLINE_STYLE_MAX_CHOICES = 3
LIST_ITEM_SEPARATOR = "\n   "


class PromptRenderer:
    """Turns a prompt spec into a Message.

    Args:
        channel: Reports how many buttons the user's channel can show.
        chooser: Picks one of several prompt variants; defaults to random.choice.
        default_retry_prompt: Prefixed to plain text prompts on retry when the
            spec has no retry prompt of its own.
    """

    def __init__(
        self,
        channel: Optional[ChannelCapabilityInterface] = None,
        chooser: Optional[PromptChooser] = None,
        default_retry_prompt: str = DEFAULT_RETRY_PROMPT,
    ):
        self.channel = channel or ChannelCapabilityTable()
        self.chooser = chooser
        self.default_retry_prompt = default_retry_prompt

    def _select(self, content: PromptContent) -> PromptContent:
        if isinstance(content, list):
            return random_prompt(content, self.chooser)
        return content

    def render(
        self,
        spec: PromptSpec,
        is_retry: bool = False,
        session: Optional[PromptSessionInterface] = None,
    ) -> Message:
        prompt = self._select(spec.prompt)
        if is_retry:
            if spec.retry_prompt:
                prompt = self._select(spec.retry_prompt)
            elif isinstance(prompt, str):
                prompt = f"{self.default_retry_prompt} {prompt}"

        if isinstance(prompt, Message):
            # Already composed by the caller
            return prompt

        msg = Message(text=prompt, language=session.language if session else None)
        if spec.prompt_kind != PromptKind.CHOICE:
            return msg

        choices = spec.enum_values or []
        style = self.resolve_list_style(spec, session)
        logger.debug("Rendering %d choices with list style %s", len(choices), style.value)

        if style == ListStyle.BUTTON:
            msg.add_attachment(
                Attachment(
                    actions=[CardAction(title=value, message=value) for value in choices]
                )
            )
        elif style == ListStyle.INLINE:
            msg.text = f"{prompt} {format_inline_list(choices)}"
        elif style == ListStyle.LIST:
            msg.text = f"{prompt}{LIST_ITEM_SEPARATOR}{format_numbered_list(choices)}"
        return msg

    def resolve_list_style(
        self, spec: PromptSpec, session: Optional[PromptSessionInterface] = None
    ) -> ListStyle:
        """Pick the concrete list style, consulting the channel when set to auto."""
        style = spec.list_style or ListStyle.NONE
        if style != ListStyle.AUTO:
            return style

        count = len(spec.enum_values or [])
        max_buttons = self.channel.max_buttons(session)
        if 0 < max_buttons and count <= max_buttons:
            return ListStyle.BUTTON
        if count <= INLINE_STYLE_MAX_CHOICES:
            return ListStyle.INLINE
        return ListStyle.LIST


def format_inline_list(choices: List[str]) -> str:
    """'1. Red, 2. Green, or 3. Blue' ('1. Yes or 2. No' for two choices)."""
    text = ""
    connector = ""
    for index, value in enumerate(choices):
        text += f"{connector}{index + 1}. {value}"
        if index == len(choices) - 2:
            connector = " or " if index == 0 else ", or "
        else:
            connector = ", "
    return text


def format_numbered_list(choices: List[str]) -> str:
    return LIST_ITEM_SEPARATOR.join(
        f"{index + 1}. {value}" for index, value in enumerate(choices)
    )

"""Entry points for asking the user a typed question.

Example:
    dialog = await Prompts.choice(session, "Pick a color", "Red|Green|Blue")
    await session.dispatch("green")
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from turnprompt.types import ChoiceSource, PromptChooser
from turnprompt.utils.env import get_env_var

from .default_entity_recognition import DefaultEntityRecognizer
from .default_recognizer import SimplePromptRecognizer
from .interpreters import UtteranceInterpreter
from .models import ListStyle, PromptContent, PromptKind, PromptOptions, PromptSpec
from .prompt_dialog import PromptDialog
from .prompt_renderer import DEFAULT_RETRY_PROMPT, PromptRenderer
from .recognizer_interfaces import (
    ChannelCapabilityInterface,
    EntityRecognizerInterface,
    PromptRecognizerInterface,
    PromptSessionInterface,
)


def _default_retry_prompt() -> str:
    return str(
        get_env_var(
            "TURNPROMPT_DEFAULT_RETRY_PROMPT", str, default=DEFAULT_RETRY_PROMPT
        )
    )


@dataclass
class PromptsOptions:
    """Collaborators shared by every prompt started through Prompts.

    entities parses replies (unless a custom recognizer is set) and expands choice lists.
    """

    recognizer: Optional[PromptRecognizerInterface] = None  # built from entities when unset
    entities: EntityRecognizerInterface = field(default_factory=DefaultEntityRecognizer)
    default_retry_prompt: str = field(default_factory=_default_retry_prompt)
    channel: Optional[ChannelCapabilityInterface] = None
    chooser: Optional[PromptChooser] = None


class Prompts:
    """Starts prompt dialogs on a session."""

    options: PromptsOptions = PromptsOptions()

    @classmethod
    def configure(cls, **options: Any) -> None:
        """Replace some of the shared collaborators, e.g. configure(recognizer=MyRecognizer())."""
        for key, value in options.items():
            if not hasattr(cls.options, key):
                raise ValueError(f"Unknown Prompts option '{key}'")
            setattr(cls.options, key, value)

    @classmethod
    def reset(cls) -> None:
        """Restore the default collaborators."""
        cls.options = PromptsOptions()

    @classmethod
    def dialog(cls, session: PromptSessionInterface) -> PromptDialog:
        """Build a prompt dialog bound to session using the configured collaborators."""
        renderer = PromptRenderer(
            channel=cls.options.channel,
            chooser=cls.options.chooser,
            default_retry_prompt=cls.options.default_retry_prompt,
        )
        recognizer = cls.options.recognizer or SimplePromptRecognizer(
            UtteranceInterpreter(cls.options.entities)
        )
        return PromptDialog(session, recognizer=recognizer, renderer=renderer)

    @classmethod
    async def _begin(
        cls,
        session: PromptSessionInterface,
        prompt_kind: PromptKind,
        prompt: PromptContent,
        options: Optional[Any] = None,
        **extra: Any,
    ) -> PromptDialog:
        prompt_options = PromptOptions.parse_options(options)
        spec = PromptSpec.model_validate(
            {
                **prompt_options.model_dump(exclude_unset=True),
                "prompt_kind": prompt_kind,
                "prompt": prompt,
                **extra,
            }
        )
        dialog = cls.dialog(session)
        await dialog.begin(spec)
        if hasattr(session, "active_dialog"):
            session.active_dialog = dialog
        return dialog

    @classmethod
    async def text(cls, session: PromptSessionInterface, prompt: PromptContent) -> PromptDialog:
        return await cls._begin(session, PromptKind.TEXT, prompt)

    @classmethod
    async def number(
        cls,
        session: PromptSessionInterface,
        prompt: PromptContent,
        options: Optional[Any] = None,
    ) -> PromptDialog:
        return await cls._begin(session, PromptKind.NUMBER, prompt, options)

    @classmethod
    async def confirm(
        cls,
        session: PromptSessionInterface,
        prompt: PromptContent,
        options: Optional[Any] = None,
    ) -> PromptDialog:
        return await cls._begin(session, PromptKind.CONFIRM, prompt, options)

    @classmethod
    async def choice(
        cls,
        session: PromptSessionInterface,
        prompt: PromptContent,
        choices: ChoiceSource,
        options: Optional[Any] = None,
    ) -> PromptDialog:
        """Ask the user to pick one of choices ("a|b|c", a mapping's keys, or a list)."""
        prompt_options = PromptOptions.parse_options(options)
        list_style = prompt_options.list_style or ListStyle.AUTO
        return await cls._begin(
            session,
            PromptKind.CHOICE,
            prompt,
            prompt_options,
            enum_values=cls.options.entities.expand_choices(choices),
            list_style=list_style,
        )

    @classmethod
    async def time(
        cls,
        session: PromptSessionInterface,
        prompt: PromptContent,
        options: Optional[Any] = None,
    ) -> PromptDialog:
        return await cls._begin(session, PromptKind.TIME, prompt, options)

"""Tests for prompt rendering and choice list styles."""

import pytest

from conftest import COLORS, first_variant, make_spec
from turnprompt.prompts.default_channel import ChannelCapabilityTable, StaticChannelCapability
from turnprompt.prompts.message_models import CardAction, Message
from turnprompt.prompts.models import ListStyle, PromptKind
from turnprompt.prompts.prompt_renderer import (
    PromptRenderer,
    format_inline_list,
    format_numbered_list,
)

FIVE = ["One", "Two", "Three", "Four", "Five"]


def choice_spec(values, list_style=ListStyle.AUTO, prompt="Pick one"):
    return make_spec(
        PromptKind.CHOICE, prompt=prompt, enum_values=values, list_style=list_style
    ).normalized()


def test_plain_prompt(renderer):
    msg = renderer.render(make_spec(PromptKind.NUMBER, prompt="How many?"))
    assert msg.text == "How many?"
    assert msg.attachments == []


def test_variant_selection_is_injectable():
    spec = make_spec(PromptKind.TEXT, prompt=["first", "second"])
    assert PromptRenderer(chooser=first_variant).render(spec).text == "first"
    assert PromptRenderer(chooser=lambda v: v[1]).render(spec).text == "second"


def test_retry_prefixes_default_apology(renderer):
    msg = renderer.render(make_spec(PromptKind.NUMBER, prompt="How many?"), is_retry=True)
    assert msg.text == "I didn't understand. How many?"


def test_retry_prefers_retry_prompt(renderer):
    spec = make_spec(
        PromptKind.NUMBER, prompt="How many?", retry_prompt=["Please type a number.", "x"]
    )
    assert renderer.render(spec, is_retry=True).text == "Please type a number."


def test_custom_default_retry_prompt():
    renderer = PromptRenderer(default_retry_prompt="Sorry.")
    msg = renderer.render(make_spec(PromptKind.TEXT, prompt="Name?"), is_retry=True)
    assert msg.text == "Sorry. Name?"


def test_rich_message_returned_unmodified(renderer):
    card = Message(text="Choose wisely")
    spec = choice_spec(COLORS, prompt=card)
    assert renderer.render(spec) is card
    assert renderer.render(spec, is_retry=True) is card


def test_auto_buttons_when_channel_supports_them(button_renderer):
    msg = button_renderer.render(choice_spec(COLORS))
    assert msg.text == "Pick one"
    assert len(msg.attachments) == 1
    assert msg.attachments[0].actions == [CardAction(title=c, message=c) for c in COLORS]


def test_auto_list_when_too_many_for_buttons(renderer):
    msg = renderer.render(choice_spec(FIVE))
    lines = msg.text.split("\n")
    assert lines[0] == "Pick one"
    assert [line.strip() for line in lines[1:]] == [
        "1. One",
        "2. Two",
        "3. Three",
        "4. Four",
        "5. Five",
    ]
    assert msg.attachments == []


def test_auto_inline_for_short_lists(renderer):
    msg = renderer.render(choice_spec(COLORS))
    assert msg.text == "Pick one 1. Red, 2. Green, or 3. Blue"


def test_auto_four_choices_use_list():
    renderer = PromptRenderer(channel=StaticChannelCapability(3))
    assert renderer.resolve_list_style(choice_spec(FIVE[:4])) == ListStyle.LIST
    assert renderer.resolve_list_style(choice_spec(FIVE[:3])) == ListStyle.BUTTON


@pytest.mark.parametrize(
    "style, expected",
    [
        (ListStyle.NONE, "Pick one"),
        (ListStyle.INLINE, "Pick one 1. One, 2. Two, 3. Three, 4. Four, or 5. Five"),
    ],
)
def test_explicit_style_overrides_auto(button_renderer, style, expected):
    msg = button_renderer.render(choice_spec(FIVE, list_style=style))
    assert msg.text == expected
    assert msg.attachments == []


def test_channel_table_uses_session_channel(session):
    renderer = PromptRenderer(channel=ChannelCapabilityTable({"console": 10}))
    msg = renderer.render(choice_spec(COLORS), session=session)
    assert len(msg.attachments[0].actions) == 3
    assert msg.language == "en"


def test_inline_connectors():
    assert format_inline_list(["Yes", "No"]) == "1. Yes or 2. No"
    assert format_inline_list(["Only"]) == "1. Only"
    assert format_inline_list(COLORS) == "1. Red, 2. Green, or 3. Blue"


def test_numbered_list():
    assert format_numbered_list(["a", "b"]).split("\n") == ["1. a", "   2. b"]


def test_rendering_is_deterministic(renderer):
    spec = choice_spec(COLORS)
    first = renderer.render(spec)
    second = renderer.render(spec)
    assert first.model_dump_json() == second.model_dump_json()

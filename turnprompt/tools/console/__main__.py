"""
Run a single prompt dialog in the terminal.

Example:
    python -m turnprompt.tools.console --kind choice --choices "Red|Green|Blue" "Pick a color"
"""

import argparse
import asyncio
import json
import sys
from typing import Callable, Optional

from turnprompt.chat_context import ChatSession
from turnprompt.prompts.default_channel import StaticChannelCapability
from turnprompt.prompts.message_models import Message
from turnprompt.prompts.models import (
    ListStyle,
    PromptConfigurationError,
    PromptKind,
    RecognitionOutcome,
    ResumeReason,
)
from turnprompt.prompts.prompts import Prompts


def format_message(message: Message) -> str:
    """Render a message as console text, buttons shown as [title]."""
    lines = [message.text] if message.text else []
    for attachment in message.attachments:
        if attachment.actions:
            lines.append("  ".join(f"[{action.title}]" for action in attachment.actions))
    return "\n".join(lines)


def outcome_to_dict(outcome: Optional[RecognitionOutcome]) -> dict:
    if outcome is None:
        return {"resumed": None}
    response = outcome.response
    if hasattr(response, "model_dump"):
        response = response.model_dump(mode="json")
    return {
        "resumed": outcome.resumed.value,
        "prompt_kind": outcome.prompt_kind.value if outcome.prompt_kind else None,
        "response": response,
        "error": str(outcome.error) if outcome.error else None,
    }


async def run_prompt(
    args: argparse.Namespace, read_line: Optional[Callable[[str], str]] = None
) -> Optional[RecognitionOutcome]:
    """Start the prompt described by args and feed it lines until it ends."""
    read_line = read_line or input
    session = ChatSession(channel_id="console")
    Prompts.configure(channel=StaticChannelCapability(args.max_buttons))

    options = {"maxRetries": args.max_retries}
    if args.list_style:
        options["listStyle"] = args.list_style

    kind = PromptKind(args.kind)
    if kind == PromptKind.TEXT:
        await Prompts.text(session, args.prompt)
    elif kind == PromptKind.CHOICE:
        await Prompts.choice(session, args.prompt, args.choices or "", options)
    elif kind == PromptKind.NUMBER:
        await Prompts.number(session, args.prompt, options)
    elif kind == PromptKind.CONFIRM:
        await Prompts.confirm(session, args.prompt, options)
    else:
        await Prompts.time(session, args.prompt, options)

    sent = 0
    while True:
        for message in session.outbox[sent:]:
            print(format_message(message))
        sent = len(session.outbox)
        if session.active_dialog is None:
            return session.last_result
        try:
            utterance = read_line("> ")
        except EOFError:
            return None
        await session.dispatch(utterance)


def main():
    """
    Main function for running a prompt in the console.
    """
    parser = argparse.ArgumentParser(description="Ask a typed question in the console")
    parser.add_argument("prompt", help="Prompt text sent to the user")
    parser.add_argument(
        "--kind",
        choices=[k.value for k in PromptKind],
        default=PromptKind.TEXT.value,
        help="Kind of answer expected",
    )
    parser.add_argument("--choices", help="Choices for a choice prompt, separated by '|'")
    parser.add_argument("--max-retries", type=int, default=1)
    parser.add_argument("--list-style", choices=[s.value for s in ListStyle])
    parser.add_argument(
        "--max-buttons",
        type=int,
        default=0,
        help="Number of buttons the console pretends to support",
    )
    args = parser.parse_args()

    try:
        outcome = asyncio.run(run_prompt(args))
    except PromptConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        Prompts.reset()

    print(json.dumps(outcome_to_dict(outcome), indent=4))
    if outcome is None or outcome.resumed != ResumeReason.COMPLETED:
        sys.exit(1)


if __name__ == "__main__":
    main()

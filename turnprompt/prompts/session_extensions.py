"""Read and write the prompt dialog state kept in a session's dialog data."""

from typing import Optional

from pydantic import ValidationError

from turnprompt.utils.logging import logger

from .models import DialogState
from .recognizer_interfaces import PromptSessionInterface

DIALOG_STATE_KEY = "prompt_dialog"


def get_dialog_state(session: PromptSessionInterface) -> Optional[DialogState]:
    """Get the persisted prompt state, or None if no prompt is in flight."""
    state_data = session.dialog_data.get(DIALOG_STATE_KEY)
    if not state_data:
        return None
    try:
        return DialogState.model_validate(state_data)
    except ValidationError as e:
        logger.warning("Discarding invalid prompt dialog state: %s", e)
        clear_dialog_state(session)
        return None


def set_dialog_state(session: PromptSessionInterface, state: DialogState) -> None:
    """Persist the prompt state. Stored as plain JSON types so any store can keep it."""
    session.dialog_data[DIALOG_STATE_KEY] = state.model_dump(mode="json")


def clear_dialog_state(session: PromptSessionInterface) -> None:
    session.dialog_data.pop(DIALOG_STATE_KEY, None)

"""
Chat session module for turnprompt.

This module provides the ChatSession class, a small hosting conversation that
runs prompt dialogs: it delivers outbound messages, routes user replies to the
active prompt, collects final results and persists per-dialog data between turns.
"""

from pathlib import Path
from typing import Any, Optional

from murmurhash import mrmr  # type: ignore # Missing library stubs
from speedict import Rdict  # pylint: disable=no-name-in-module

from turnprompt.prompts.message_models import Message
from turnprompt.prompts.models import PromptDialogError, RecognitionOutcome
from turnprompt.prompts.prompt_dialog import PromptDialog
from turnprompt.prompts.prompts import Prompts
from turnprompt.prompts.recognizer_interfaces import PromptSessionInterface
from turnprompt.prompts.session_extensions import get_dialog_state
from turnprompt.types import (
    CompareConfidenceFunc,
    ConfidenceResult,
    ConversationEntry,
    DialogData,
)
from turnprompt.utils.logging import logger

SESSIONS_FOLDER = "___prompt_sessions"


class ConversationHistory:
    """Manages conversation history entries."""

    def __init__(self):
        self._history: list[ConversationEntry] = []

    def append(self, entry: ConversationEntry) -> None:
        """Append an entry to the history."""
        self._history.append(entry)

    def get_entries(self, last_n: int = -1) -> list[ConversationEntry]:
        """Get conversation entries.

        Args:
            last_n: Number of most recent entries to return. -1 returns all entries.
        """
        return self._history if last_n == -1 else self._history[-last_n:]

    def clear(self) -> None:
        """Clear all entries from history."""
        self._history.clear()

    def __len__(self) -> int:
        return len(self._history)


# pylint: disable=too-many-instance-attributes
class ChatSession(PromptSessionInterface):
    """Hosts prompt dialogs for one user on one channel.

    Args:
        user_id: Identifies the user; part of the session id.
        channel_id: Identifies the channel; part of the session id and used to
            look up channel capabilities.
        language: Language tag passed through to recognition.
        confidence_arbiter: Optional callable (language, utterance, score) -> bool,
            sync or async, that lets an outer conversation claim an utterance.
    """

    def __init__(
        self,
        user_id: str = "user_id",
        channel_id: str = "console",
        language: Optional[str] = "en",
        confidence_arbiter: Optional[CompareConfidenceFunc] = None,
    ):
        self.user_id = user_id
        self._channel_id = channel_id
        self._language = language
        self.confidence_arbiter = confidence_arbiter
        self._dialog_data: DialogData = {}
        self._history = ConversationHistory()
        self.outbox: list[Message] = []
        self.results: list[RecognitionOutcome] = []
        self.active_dialog: Optional[PromptDialog] = None

    @property
    def language(self) -> Optional[str]:
        return self._language

    @language.setter
    def language(self, language: Optional[str]) -> None:
        self._language = language

    @property
    def channel_id(self) -> str:
        return self._channel_id

    @property
    def dialog_data(self) -> DialogData:
        return self._dialog_data

    @property
    def last_result(self) -> Optional[RecognitionOutcome]:
        return self.results[-1] if self.results else None

    def send(self, message: Message) -> None:
        self.outbox.append(message)
        self._history.append(("bot", message.text))

    def end_dialog(self, result: Any) -> None:
        self.results.append(result)
        self.active_dialog = None

    def compare_confidence(
        self, language: Optional[str], utterance: str, score: float
    ) -> ConfidenceResult:
        if self.confidence_arbiter is None:
            return False
        return self.confidence_arbiter(language, utterance, score)

    async def dispatch(self, utterance: str) -> RecognitionOutcome:
        """Route a user utterance to the active prompt dialog.

        Raises:
            PromptDialogError: If no prompt is waiting for a reply.
        """
        self._history.append(("user", utterance))
        if self.active_dialog is None:
            if get_dialog_state(self) is None:
                raise PromptDialogError("No prompt is waiting for a reply.")
            # Prompt state was restored from storage without its dialog object
            self.active_dialog = Prompts.dialog(self)

        return await self.active_dialog.reply_received(utterance)

    def get_conversation_history(self, last_n: int = -1) -> list[ConversationEntry]:
        return self._history.get_entries(last_n)

    @property
    def current_session_id(self) -> str:
        """Session ID, deterministically generated from channel_id and user_id."""
        session_key = f"{self._channel_id}/{self.user_id}"
        hash_value = mrmr.hash(session_key) & 0xFFFFFFFF
        return hex(hash_value)

    def _get_session_storage_path(
        self, folderpath: str, session_id: Optional[str] = None
    ) -> Path:
        session_id = session_id or self.current_session_id
        storage_path = Path(folderpath) / SESSIONS_FOLDER / session_id
        storage_path.mkdir(parents=True, exist_ok=True)
        return storage_path

    def save_session(self, folderpath: str, session_id: Optional[str] = None) -> str:
        """Save dialog data and conversation history to disk using Rdict.

        Returns:
            Path to the saved session store
        """
        session_path = self._get_session_storage_path(folderpath, session_id) / "session.rdict"

        session_rdict = Rdict(str(session_path))
        try:
            session_rdict["dialog_data"] = dict(self._dialog_data)
            session_rdict["history"] = [
                {"speaker": speaker, "text": text}
                for speaker, text in self._history.get_entries()
            ]
            session_rdict["user_id"] = self.user_id
            session_rdict["channel_id"] = self._channel_id
        finally:
            session_rdict.close()

        logger.debug("Saved session %s to %s", session_id or self.current_session_id, session_path)
        return str(session_path)

    def load_session(self, folderpath: str, session_id: Optional[str] = None) -> None:
        """Load dialog data and conversation history saved by save_session.

        Raises:
            FileNotFoundError: If no session was saved under folderpath
        """
        session_id = session_id or self.current_session_id
        session_path = Path(folderpath) / SESSIONS_FOLDER / session_id / "session.rdict"
        if not session_path.exists():
            raise FileNotFoundError(f"Session store not found: {session_path}")

        session_rdict = Rdict(str(session_path))
        try:
            dialog_data = session_rdict.get("dialog_data", {})
            history_data = session_rdict.get("history", [])
        finally:
            session_rdict.close()

        self._dialog_data = dict(dialog_data or {})
        self._history.clear()
        for entry in history_data or []:
            self._history.append((entry["speaker"], entry["text"]))
        self.active_dialog = None
        logger.debug("Loaded session %s from %s", session_id, session_path)

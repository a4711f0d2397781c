"""Runs a single prompt across turns: sends the prompt, interprets replies and
re-prompts until the answer is recognized, the user cancels, or the retry budget
runs out.
"""

from typing import Optional

from turnprompt.utils.logging import logger

from .default_recognizer import SimplePromptRecognizer
from .message_models import Message
from .models import (
    DialogState,
    PromptDialogError,
    PromptSpec,
    PromptStatus,
    RecognitionError,
    RecognitionErrorKind,
    RecognitionOutcome,
    RecognitionRequest,
    ResumeReason,
)
from .prompt_renderer import PromptRenderer
from .recognizer_interfaces import PromptRecognizerInterface, PromptSessionInterface
from .session_extensions import clear_dialog_state, get_dialog_state, set_dialog_state


class PromptDialog:
    """Retry state machine of one prompt.

    The dialog itself holds no per-turn data: everything lives in the DialogState
    persisted in the session's dialog data, so a fresh PromptDialog bound to the
    same session can pick up the conversation on the next turn.
    """

    def __init__(
        self,
        session: PromptSessionInterface,
        recognizer: Optional[PromptRecognizerInterface] = None,
        renderer: Optional[PromptRenderer] = None,
    ):
        self.session = session
        self.recognizer = recognizer or SimplePromptRecognizer()
        self.renderer = renderer or PromptRenderer()
        self._final_status: Optional[PromptStatus] = None

    @property
    def status(self) -> Optional[PromptStatus]:
        """Current state, the terminal state once ended, or None if never started."""
        state = get_dialog_state(self.session)
        if state is not None:
            return state.status
        return self._final_status

    @property
    def remaining_retries(self) -> Optional[int]:
        state = get_dialog_state(self.session)
        return state.remaining_retries if state else None

    def _transition_state(self, state: DialogState, new_status: PromptStatus) -> None:
        logger.debug(
            "Prompt state: %s -> %s", state.status.value, new_status.value
        )
        state.status = new_status

    async def begin(self, spec: PromptSpec) -> Message:
        """Start the prompt and send its first message.

        Raises:
            PromptConfigurationError: If the prompt cannot be run (e.g. a choice
                prompt without choices).
        """
        state = DialogState.from_spec(spec.normalized())
        self._final_status = None
        set_dialog_state(self.session, state)

        message = self.renderer.render(state, is_retry=False, session=self.session)
        self.session.send(message)

        self._transition_state(state, PromptStatus.WAITING_FOR_REPLY)
        set_dialog_state(self.session, state)
        logger.info(
            "Prompt started: kind=%s max_retries=%d",
            state.prompt_kind.value,
            state.max_retries,
        )
        return message

    async def reply_received(
        self, utterance: str, language: Optional[str] = None
    ) -> RecognitionOutcome:
        """Process one user reply and return this turn's recognition outcome.

        Raises:
            PromptDialogError: If no prompt is waiting for a reply.
        """
        state = get_dialog_state(self.session)
        if state is None or state.status != PromptStatus.WAITING_FOR_REPLY:
            raise PromptDialogError("No prompt is waiting for a reply.")

        request = RecognitionRequest(
            prompt_kind=state.prompt_kind,
            utterance=utterance,
            compare_confidence=self.session.compare_confidence,
            language=language or self.session.language,
            enum_values=state.enum_values,
            ref_date=state.ref_date,
        )
        try:
            outcome = await self.recognizer.recognize(request)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.exception("Prompt recognizer raised for '%s'", request.utterance[:50])
            error = RecognitionError(RecognitionErrorKind.RECOGNIZER_FAULT, str(e))
            error.__cause__ = e
            outcome = RecognitionOutcome(
                resumed=ResumeReason.NOT_COMPLETED,
                prompt_kind=state.prompt_kind,
                error=error,
            )

        if outcome.handled:
            # An outer dialog took the utterance and owns what happens next
            logger.debug("Reply handled elsewhere, prompt keeps waiting.")
            return outcome

        if (
            outcome.error is not None
            or outcome.resumed in (ResumeReason.COMPLETED, ResumeReason.CANCELED)
            or state.remaining_retries == 0
        ):
            outcome.prompt_kind = state.prompt_kind
            self._end(state, outcome)
            return outcome

        state.remaining_retries -= 1
        set_dialog_state(self.session, state)
        logger.debug(
            "Reply not recognized, re-prompting (%d retries left)",
            state.remaining_retries,
        )
        self.session.send(
            self.renderer.render(state, is_retry=True, session=self.session)
        )
        return outcome

    def _end(self, state: DialogState, outcome: RecognitionOutcome) -> None:
        if outcome.error is not None:
            final_status = PromptStatus.FAILED
        elif outcome.resumed == ResumeReason.COMPLETED:
            final_status = PromptStatus.COMPLETED
        elif outcome.resumed == ResumeReason.CANCELED:
            final_status = PromptStatus.CANCELED
        else:
            final_status = PromptStatus.NOT_COMPLETED_EXHAUSTED

        self._transition_state(state, final_status)
        self._final_status = final_status
        clear_dialog_state(self.session)
        logger.info(
            "Prompt ended: kind=%s status=%s",
            state.prompt_kind.value,
            final_status.value,
        )
        self.session.end_dialog(outcome)

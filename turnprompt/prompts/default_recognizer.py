"""Default implementation of the prompt recognizer interface.

Runs cancellation detection, then the interpreter for the prompt kind, then
confidence arbitration, and reports everything through a RecognitionOutcome.
"""

from typing import Optional

from turnprompt.utils.logging import logger

from .arbitration import ConfidenceArbiter
from .interpreters import UtteranceInterpreter
from .models import (
    Interpretation,
    RecognitionError,
    RecognitionErrorKind,
    RecognitionOutcome,
    RecognitionRequest,
    ResumeReason,
)
from .recognizer_interfaces import PromptRecognizerInterface
from .utils import check_for_cancellation


class SimplePromptRecognizer(PromptRecognizerInterface):
    """Default implementation of prompt recognition functionality."""

    def __init__(
        self,
        interpreter: Optional[UtteranceInterpreter] = None,
        arbiter: Optional[ConfidenceArbiter] = None,
    ):
        self.interpreter = interpreter or UtteranceInterpreter()
        self.arbiter = arbiter or ConfidenceArbiter()

    async def recognize(self, request: RecognitionRequest) -> RecognitionOutcome:
        if check_for_cancellation(request.utterance):
            logger.info("Prompt canceled by utterance '%s'", request.utterance[:50])
            return RecognitionOutcome(
                resumed=ResumeReason.CANCELED, prompt_kind=request.prompt_kind
            )

        interpretation: Optional[Interpretation] = None
        error: Optional[RecognitionError] = None
        try:
            interpretation = self.interpreter.interpret(
                request.prompt_kind,
                request.utterance,
                request.enum_values,
                request.ref_date,
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.exception(
                "Error interpreting '%s' for %s prompt",
                request.utterance[:50],
                request.prompt_kind.value,
            )
            error = RecognitionError(RecognitionErrorKind.INTERPRETER_FAULT, str(e))
            error.__cause__ = e

        return await self.arbiter.arbitrate(request, interpretation, error)

"""Offers a recognized utterance to the hosting conversation before a prompt commits to it."""

import inspect
from typing import Optional

from turnprompt.utils.logging import logger

from .models import (
    Interpretation,
    RecognitionError,
    RecognitionErrorKind,
    RecognitionOutcome,
    RecognitionRequest,
    ResumeReason,
)


# pylint: disable=too-few-public-methods
class ConfidenceArbiter:
    """Resolves an interpretation into a RecognitionOutcome.

    The request's compare_confidence callable is invoked exactly once per call,
    even for a zero score or a failed interpretation, since an outer dialog may
    still want to claim the utterance. A claimed utterance is marked handled and
    the prompt takes no further action on it.
    """

    async def arbitrate(
        self,
        request: RecognitionRequest,
        interpretation: Optional[Interpretation] = None,
        error: Optional[RecognitionError] = None,
    ) -> RecognitionOutcome:
        score = interpretation.score if interpretation and error is None else 0.0

        try:
            claimed = request.compare_confidence(
                request.language, request.utterance, score
            )
            if inspect.isawaitable(claimed):
                claimed = await claimed
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.exception("compare_confidence failed for '%s'", request.utterance[:50])
            arbitration_error = RecognitionError(
                RecognitionErrorKind.ARBITRATION_FAULT, str(e)
            )
            arbitration_error.__cause__ = e
            return RecognitionOutcome(
                resumed=ResumeReason.NOT_COMPLETED,
                prompt_kind=request.prompt_kind,
                error=error or arbitration_error,
            )

        if claimed:
            logger.debug("Utterance '%s' claimed by an outer dialog", request.utterance[:50])
            return RecognitionOutcome(
                resumed=ResumeReason.NOT_COMPLETED,
                prompt_kind=request.prompt_kind,
                handled=True,
            )
        if score > 0:
            return RecognitionOutcome(
                resumed=ResumeReason.COMPLETED,
                prompt_kind=request.prompt_kind,
                response=interpretation.value,
            )
        return RecognitionOutcome(
            resumed=ResumeReason.NOT_COMPLETED,
            prompt_kind=request.prompt_kind,
            error=error,
        )

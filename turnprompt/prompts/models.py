from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from turnprompt.types import CompareConfidenceFunc
from .message_models import Message


class PromptKind(str, Enum):
    """Kind of answer a prompt expects from the user."""
    TEXT = "text"
    NUMBER = "number"
    CONFIRM = "confirm"
    CHOICE = "choice"
    TIME = "time"


class ListStyle(str, Enum):
    """How the choices of a choice prompt are presented."""
    NONE = "none"
    INLINE = "inline"
    LIST = "list"
    BUTTON = "button"
    AUTO = "auto"


class ResumeReason(str, Enum):
    """Why a prompt turn handed control back to the caller."""
    COMPLETED = "completed"
    NOT_COMPLETED = "not_completed"
    CANCELED = "canceled"


class PromptStatus(str, Enum):
    """States of a prompt dialog."""
    PROMPTING = "prompting"
    WAITING_FOR_REPLY = "waiting_for_reply"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"
    NOT_COMPLETED_EXHAUSTED = "not_completed_exhausted"

    @property
    def is_terminal(self) -> bool:
        return self not in (PromptStatus.PROMPTING, PromptStatus.WAITING_FOR_REPLY)


class RecognitionErrorKind(str, Enum):
    INTERPRETER_FAULT = "interpreter_fault"
    ARBITRATION_FAULT = "arbitration_fault"
    RECOGNIZER_FAULT = "recognizer_fault"


class PromptConfigurationError(ValueError):
    """Raised when a prompt is started with invalid options."""


class PromptDialogError(RuntimeError):
    """Raised when a prompt dialog is driven out of order."""


class RecognitionError(Exception):
    """Wraps an unexpected fault raised while recognizing an utterance.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, kind: RecognitionErrorKind, detail: str):
        super().__init__(f"{kind.value}: {detail}")
        self.kind = kind
        self.detail = detail


PromptContent = Union[str, List[str], Message]


class PromptOptions(BaseModel):
    """Options a caller may set when starting a prompt. Unknown keys are rejected."""
    retry_prompt: Optional[PromptContent] = Field(default=None, alias="retryPrompt")
    max_retries: Optional[int] = Field(default=None, ge=0, alias="maxRetries")
    ref_date: Optional[float] = Field(default=None, alias="refDate")  # epoch seconds
    list_style: Optional[ListStyle] = Field(default=None, alias="listStyle")

    class Config:
        extra = "forbid"
        populate_by_name = True

    @classmethod
    def parse_options(cls, options: Optional[Any] = None) -> "PromptOptions":
        """Validate a mapping (or pass through a PromptOptions instance)."""
        if options is None:
            return cls()
        if isinstance(options, PromptOptions):
            return cls.model_validate(options.model_dump(exclude_unset=True))
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise PromptConfigurationError(f"Invalid prompt options: {e}") from e


class PromptSpec(PromptOptions):
    """Everything needed to run one prompt dialog."""
    prompt_kind: PromptKind = Field(alias="promptType")
    prompt: PromptContent
    enum_values: Optional[List[str]] = Field(default=None, alias="enumValues")

    def normalized(self) -> "PromptSpec":
        """Return a copy with defaults applied, raising PromptConfigurationError if unusable."""
        if isinstance(self.prompt, list) and not self.prompt:
            raise PromptConfigurationError("Prompt variants must not be empty.")
        if isinstance(self.retry_prompt, list) and not self.retry_prompt:
            raise PromptConfigurationError("Retry prompt variants must not be empty.")

        updates: dict[str, Any] = {}
        if self.max_retries is None:
            updates["max_retries"] = 1
        if self.prompt_kind == PromptKind.CHOICE:
            if not self.enum_values:
                raise PromptConfigurationError(
                    "A choice prompt needs at least one choice."
                )
            if self.list_style is None:
                updates["list_style"] = ListStyle.AUTO
        return self.model_copy(update=updates)


class DialogState(PromptSpec):
    """Persisted state of an in-flight prompt dialog."""
    remaining_retries: int = Field(default=0, ge=0)
    status: PromptStatus = PromptStatus.PROMPTING

    @classmethod
    def from_spec(cls, spec: PromptSpec) -> "DialogState":
        return cls.model_validate(
            {
                **spec.model_dump(),
                "remaining_retries": spec.max_retries or 0,
                "status": PromptStatus.PROMPTING,
            }
        )

    def to_spec(self) -> PromptSpec:
        return PromptSpec.model_validate(
            self.model_dump(exclude={"remaining_retries", "status"})
        )


@dataclass
class RecognitionRequest:
    """Input of one recognition turn."""

    prompt_kind: PromptKind
    utterance: str
    compare_confidence: CompareConfidenceFunc
    language: Optional[str] = None
    enum_values: Optional[List[str]] = None
    ref_date: Optional[float] = None

    def __post_init__(self):
        self.utterance = (self.utterance or "").strip()


@dataclass
class Interpretation:
    """Typed value extracted from an utterance and how confident we are about it."""

    value: Any = None
    score: float = 0.0  # 0.0 means nothing was recognized

    @property
    def recognized(self) -> bool:
        return self.score > 0


class RecognitionOutcome(BaseModel):
    """Result of a recognition turn, and the final result handed to the caller."""
    resumed: ResumeReason
    prompt_kind: Optional[PromptKind] = None
    response: Optional[Any] = None
    error: Optional[RecognitionError] = None
    handled: bool = False  # An outer claimant took the utterance

    class Config:
        arbitrary_types_allowed = True

"""Data models for generated forms.

A question list coming back from the generation service is accepted only as a
whole: one malformed question rejects the entire payload.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from ..exceptions import MalformedResponseError


class QuestionType(str, Enum):
    """Kind of form field a question is rendered as."""

    SHORT_ANSWER = "shortAnswer"
    PARAGRAPH = "paragraph"
    MULTIPLE_CHOICE = "multipleChoice"
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"
    DATE = "date"
    TIME = "time"

    @property
    def requires_options(self) -> bool:
        """Whether questions of this type carry a list of choices."""
        return self in OPTION_TYPES


OPTION_TYPES = frozenset({
    QuestionType.MULTIPLE_CHOICE,
    QuestionType.CHECKBOX,
    QuestionType.DROPDOWN,
})


class Question(BaseModel):
    """A single generated form question."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    text: str = Field(strict=True, min_length=1, description="Prompt shown to the form-filler")
    type: QuestionType = Field(description="Field type used to render the question")
    options: tuple[str, ...] | None = Field(
        default=None,
        description="Ordered choices, only for multipleChoice, checkbox and dropdown"
    )
    required: bool = Field(default=False, strict=True, description="Whether an answer is mandatory")

    @model_validator(mode="before")
    @classmethod
    def drop_unused_options(cls, data: Any) -> Any:
        """Ignore options sent for types that do not use them."""
        if isinstance(data, dict) and "options" in data:
            raw_type = data.get("type")
            if isinstance(raw_type, QuestionType):
                raw_type = raw_type.value
            if raw_type not in {t.value for t in OPTION_TYPES}:
                data = {k: v for k, v in data.items() if k != "options"}
        return data

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject whitespace-only question text."""
        if not v.strip():
            raise ValueError("text must not be blank")
        return v

    @field_validator("options", mode="before")
    @classmethod
    def validate_options(cls, v: Any) -> Any:
        """Options must be a sequence of non-blank strings."""
        if v is None:
            return v
        if not isinstance(v, (list, tuple)):
            raise ValueError("options must be a list of strings")
        for option in v:
            if not isinstance(option, str) or not option.strip():
                raise ValueError("options must be non-empty strings")
        return tuple(v)

    @field_validator("required", mode="before")
    @classmethod
    def default_required(cls, v: Any) -> Any:
        """Treat an explicit null like an absent flag."""
        return False if v is None else v

    @model_validator(mode="after")
    def validate_options_for_type(self) -> "Question":
        """Choice-based questions need at least one option."""
        if self.type.requires_options and not self.options:
            raise ValueError(f"{self.type.value} question requires non-empty options")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the wire format of the generation service."""
        payload: dict[str, Any] = {"text": self.text, "type": self.type.value}
        if self.options is not None:
            payload["options"] = list(self.options)
        payload["required"] = self.required
        return payload


_QUESTION_LIST = TypeAdapter(list[Question])


def parse_questions(payload: Any) -> tuple[Question, ...]:
    """Validate a decoded response body as a question list.

    The accepted envelope is a bare JSON array of question objects.

    Args:
        payload: Decoded JSON body

    Returns:
        Tuple of validated questions, in response order

    Raises:
        MalformedResponseError: If the payload is not a non-empty array or any
            element fails validation
    """
    if not isinstance(payload, list):
        raise MalformedResponseError(
            f"Expected a JSON array of questions, got {type(payload).__name__}"
        )
    if not payload:
        raise MalformedResponseError("Response contained no questions")

    try:
        questions = _QUESTION_LIST.validate_python(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise MalformedResponseError(
            f"Invalid question at {location}: {first['msg']} ({e.error_count()} error(s))"
        ) from e

    return tuple(questions)

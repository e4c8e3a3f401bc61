"""Data models for the conversation state machine.

Snapshots are frozen: every transition builds a new ConversationState, so a
snapshot handed to a renderer never changes underneath it.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from uuid_extensions import uuid7

from ..exceptions import ErrorKind
from ..forms import Question


class MessageRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Phase(str, Enum):
    """High-level mode of the conversation."""

    IDLE = "idle"                # Ready for a new prompt
    GENERATING = "generating"    # Request in flight, progress is advancing
    PRESENTING = "presenting"    # A form has been committed and is shown


class ChatMessage(BaseModel):
    """A message in the conversation log."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid7()), description="Time-ordered unique id")
    role: MessageRole = Field(description="Who wrote the message")
    content: str = Field(description="Display text")
    timestamp: datetime = Field(default_factory=datetime.now)


class ConversationState(BaseModel):
    """Read-only snapshot of the conversation."""

    model_config = ConfigDict(frozen=True)

    messages: tuple[ChatMessage, ...] = Field(default=())
    phase: Phase = Field(default=Phase.IDLE)
    stage_index: int = Field(default=0, ge=0, description="Progress cursor, meaningful while generating")
    committed_questions: tuple[Question, ...] = Field(default=())
    epoch: int = Field(default=0, ge=0, description="Generation epoch, advanced by reset()")
    last_error: ErrorKind | None = Field(
        default=None,
        description="Kind of the most recent failed generation"
    )

    @property
    def last_message(self) -> ChatMessage | None:
        """Most recent message, if any."""
        return self.messages[-1] if self.messages else None

    @property
    def has_form(self) -> bool:
        """Whether a question list is committed."""
        return bool(self.committed_questions)

"""
FGPT: an AI-powered form generator.

A natural-language description is sent to a generation service and the
returned question list is committed through a conversation state machine
that pairs the request with cosmetic progress feedback.
"""

__version__ = "0.1.0"

from .conversation import (
    ChatMessage,
    ConversationState,
    ConversationStateMachine,
    MessageRole,
    Phase,
)
from .exceptions import (
    EmptyInputError,
    ErrorKind,
    FGPTError,
    GenerationError,
    InvalidStateError,
    MalformedResponseError,
    NetworkError,
    ServiceError,
)
from .forms import Question, QuestionType, parse_questions
from .generation import GenerationClient, GenerationConfig, HTTPGenerationClient
from .progress import ProgressSimulator

__all__ = [
    "ChatMessage",
    "ConversationState",
    "ConversationStateMachine",
    "EmptyInputError",
    "ErrorKind",
    "FGPTError",
    "GenerationClient",
    "GenerationConfig",
    "GenerationError",
    "HTTPGenerationClient",
    "InvalidStateError",
    "MalformedResponseError",
    "MessageRole",
    "NetworkError",
    "Phase",
    "ProgressSimulator",
    "Question",
    "QuestionType",
    "ServiceError",
    "parse_questions",
]

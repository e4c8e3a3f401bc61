"""Conversation state machine module for FGPT.

Provides the submit/reset orchestration between progress feedback and the
generation client.
"""

from .machine import COMPLETION_DELAY_SECONDS, ConversationStateMachine
from .messages import APOLOGY_MESSAGE, format_success_message
from .models import ChatMessage, ConversationState, MessageRole, Phase

__all__ = [
    "APOLOGY_MESSAGE",
    "COMPLETION_DELAY_SECONDS",
    "ChatMessage",
    "ConversationState",
    "ConversationStateMachine",
    "MessageRole",
    "Phase",
    "format_success_message",
]

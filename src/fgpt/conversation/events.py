"""Events delivered to the state machine's transition function.

Every event carries the epoch it was produced under; events from an older
epoch are dropped.
"""

from dataclasses import dataclass

from ..exceptions import GenerationError
from ..forms import Question


@dataclass(frozen=True)
class StageAdvanced:
    """The progress simulator reached a new stage."""

    epoch: int
    index: int


@dataclass(frozen=True)
class ProgressCompleted:
    """The generation resolved; progress jumps to the last stage."""

    epoch: int


@dataclass(frozen=True)
class GenerationSucceeded:
    """The generation client returned a validated question list."""

    epoch: int
    questions: tuple[Question, ...]


@dataclass(frozen=True)
class GenerationFailed:
    """The generation client raised a GenerationError."""

    epoch: int
    error: GenerationError


ConversationEvent = StageAdvanced | ProgressCompleted | GenerationSucceeded | GenerationFailed

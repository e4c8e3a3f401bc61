"""Exception hierarchy for FGPT.

Caller errors (empty input, overlapping submission) are raised straight to the
caller. Generation errors are caught by the conversation state machine and
turned into an apology message.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of a failed generation."""

    NETWORK = "network"
    SERVICE = "service"
    MALFORMED_RESPONSE = "malformed_response"


class FGPTError(Exception):
    """Base exception for FGPT"""

    pass


class EmptyInputError(FGPTError):
    """Prompt was empty after trimming; no request was attempted"""

    pass


class InvalidStateError(FGPTError):
    """Operation is not permitted in the current phase"""

    pass


class GenerationError(FGPTError):
    """A generation request failed"""

    kind: ErrorKind


class NetworkError(GenerationError):
    """Transport failure, timeout or aborted request"""

    kind = ErrorKind.NETWORK


class ServiceError(GenerationError):
    """Generation service answered with a non-success status"""

    kind = ErrorKind.SERVICE

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(GenerationError):
    """Response body could not be decoded or failed shape validation"""

    kind = ErrorKind.MALFORMED_RESPONSE

from abc import ABC, abstractmethod
from typing import Any

from ..forms import Question


class GenerationClient(ABC):
    """Abstract base class for form generation clients.

    This module hides how a prompt reaches the generation service.
    Implementations must:
    - Reject blank prompts before any I/O (EmptyInputError)
    - Send exactly one request per call, without retries
    - Map every failure to NetworkError, ServiceError or MalformedResponseError
    - Keep no state between calls

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            questions = await client.generate("Customer feedback survey")
    """

    @abstractmethod
    async def generate(self, prompt: str) -> tuple[Question, ...]:
        """Generate a form for a natural-language description.

        Args:
            prompt: Description of the desired form

        Returns:
            Validated questions in the order the service returned them

        Raises:
            EmptyInputError: If the prompt is blank
            NetworkError: On transport failure or timeout
            ServiceError: On a non-success response status
            MalformedResponseError: If the body fails shape validation
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "GenerationClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise

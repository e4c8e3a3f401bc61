import asyncio
import time
from typing import Any

import httpx

from ..exceptions import EmptyInputError, MalformedResponseError, NetworkError, ServiceError
from ..forms import Question, parse_questions
from .base import GenerationClient
from .config import GenerationConfig


class HTTPGenerationClient(GenerationClient):
    """Generation client that posts the prompt to the FGPT HTTP service.

    Hidden design decisions:
    - HTTP client setup and connection pooling
    - Request body format ({"topic": prompt})
    - Response envelope (bare JSON array)
    - Mapping of httpx failures onto the error taxonomy
    """

    def __init__(
        self,
        config: GenerationConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any
    ):
        """Initialize the HTTP generation client.

        Args:
            config: Service location and timeout
            transport: Optional httpx transport (used to fake the service in tests)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._config = config
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
            **client_kwargs
        )
        self._debug_callback: Any | None = None

    @property
    def config(self) -> GenerationConfig:
        """Get the injected configuration."""
        return self._config

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for request tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "HTTP", message)

    async def generate(self, prompt: str) -> tuple[Question, ...]:
        """Post the prompt and validate the returned question list.

        Args:
            prompt: Description of the desired form

        Returns:
            Validated questions

        Raises:
            EmptyInputError: If the prompt is blank (nothing is sent)
            NetworkError: On transport failure or when the timeout elapses
            ServiceError: On a non-2xx status
            MalformedResponseError: On an undecodable or invalid body
        """
        if not prompt or not prompt.strip():
            raise EmptyInputError("Prompt must not be empty")

        url = self._config.endpoint_url
        self._debug("debug", f"POST {url} ({len(prompt)} chars)")
        start = time.time()

        try:
            response = await asyncio.wait_for(
                self._client.post(
                    url,
                    json={"topic": prompt},
                    headers={"Content-Type": "application/json"},
                ),
                timeout=self._config.timeout,
            )
        except asyncio.TimeoutError as e:
            self._debug("error", f"Request timed out after {self._config.timeout}s")
            raise NetworkError(
                f"Generation service did not respond within {self._config.timeout}s"
            ) from e
        except httpx.TimeoutException as e:
            self._debug("error", f"Request timed out: {e}")
            raise NetworkError(f"Generation request timed out: {e}") from e
        except httpx.RequestError as e:
            self._debug("error", f"Transport error: {e!r}")
            raise NetworkError(f"Could not reach generation service: {e}") from e

        elapsed = time.time() - start
        self._debug("info", f"HTTP {response.status_code} in {elapsed:.2f}s")

        if not response.is_success:
            raise ServiceError(
                f"Generation service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response body is not valid JSON: {e}") from e

        questions = parse_questions(payload)
        self._debug("debug", f"Validated {len(questions)} question(s)")
        return questions

    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()

"""Pytest configuration and shared fixtures."""
import asyncio
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from fgpt.conversation import ConversationStateMachine
from fgpt.exceptions import GenerationError
from fgpt.forms import Question, parse_questions
from fgpt.generation import GenerationClient, GenerationConfig, HTTPGenerationClient
from fgpt.progress import ProgressSimulator

BASE_URL = "http://forms.test"

# Fast cadence so simulator-driven tests finish quickly
TEST_STAGE_INTERVAL = 0.01


class FakeGenerationClient(GenerationClient):
    """In-memory generation client.

    Records every prompt. When a gate is given, generate() blocks until the
    gate is set, which lets tests act while a request is in flight.
    """

    def __init__(
        self,
        result: tuple[Question, ...] = (),
        error: GenerationError | None = None,
        gate: asyncio.Event | None = None,
    ):
        self.result = result
        self.error = error
        self.gate = gate
        self.prompts: list[str] = []
        self.closed = False

    async def generate(self, prompt: str) -> tuple[Question, ...]:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def nps_payload() -> list[dict[str, Any]]:
    """Return a valid three-question NPS survey as the service sends it."""
    return [
        {
            "text": "How likely are you to recommend us to a friend?",
            "type": "multipleChoice",
            "options": ["0-6", "7-8", "9-10"],
            "required": True,
        },
        {
            "text": "What is the main reason for your score?",
            "type": "paragraph",
        },
        {
            "text": "Which channels do you use to contact us?",
            "type": "checkbox",
            "options": ["Email", "Phone", "Chat"],
            "required": False,
        },
    ]


@pytest.fixture
def nps_questions(nps_payload) -> tuple[Question, ...]:
    """Return the NPS survey as validated questions."""
    return parse_questions(nps_payload)


@pytest.fixture
def generation_config() -> GenerationConfig:
    """Return a config pointing at the fake service."""
    return GenerationConfig(base_url=BASE_URL, timeout=2.0)


@pytest.fixture
def fast_simulator_factory() -> Callable[[Callable[[int], None]], ProgressSimulator]:
    """Return a simulator factory with a 10ms cadence."""
    def _factory(on_advance: Callable[[int], None]) -> ProgressSimulator:
        return ProgressSimulator(on_advance, interval=TEST_STAGE_INTERVAL)
    return _factory


@pytest.fixture
def make_machine(fast_simulator_factory):
    """Return a builder for state machines around a given client."""
    def _make(client: GenerationClient, completion_delay: float = 0.0) -> ConversationStateMachine:
        return ConversationStateMachine(
            client,
            simulator_factory=fast_simulator_factory,
            completion_delay=completion_delay,
        )
    return _make


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Return the list that mock transports append requests to."""
    return []


@pytest.fixture
def make_http_client(generation_config, recorded_requests):
    """Return a builder for HTTP clients backed by an httpx.MockTransport.

    The handler receives the request and returns an httpx.Response (or
    raises an httpx exception).
    """
    def _make(handler: Callable[[httpx.Request], Any], config: GenerationConfig | None = None):
        async def _recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            response = handler(request)
            if asyncio.iscoroutine(response):
                response = await response
            return response

        client = HTTPGenerationClient(
            config or generation_config,
            transport=httpx.MockTransport(_recording_handler),
        )
        return client

    return _make


@pytest.fixture
def json_response():
    """Return a builder for JSON responses used by mock transports."""
    def _build(payload: Any, status_code: int = 200) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode(), headers={"Content-Type": "application/json"})
    return _build


@pytest.fixture
def fake_client():
    """Return a builder for in-memory generation clients."""
    def _make(**kwargs: Any) -> FakeGenerationClient:
        return FakeGenerationClient(**kwargs)
    return _make

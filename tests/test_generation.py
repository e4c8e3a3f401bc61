"""Unit tests for the generation module."""
import asyncio
import json

import httpx
import pytest

from fgpt.exceptions import (
    EmptyInputError,
    ErrorKind,
    MalformedResponseError,
    NetworkError,
    ServiceError,
)
from fgpt.generation import GenerationClient, GenerationConfig


class TestGenerationClientInterface:
    """Tests for the abstract GenerationClient interface."""

    def test_client_is_abstract(self):
        """Test that GenerationClient cannot be instantiated directly."""
        with pytest.raises(TypeError):
            GenerationClient()  # type: ignore


class TestGenerationConfig:
    """Tests for GenerationConfig."""

    def test_defaults(self):
        """Test default endpoint path and bounded timeout."""
        config = GenerationConfig(base_url="https://api.example.com")

        assert config.endpoint_path == "/openai"
        assert config.timeout == 30.0
        assert config.endpoint_url == "https://api.example.com/openai"

    def test_trailing_slash_removed(self):
        """Test that a trailing slash does not double up in the URL."""
        config = GenerationConfig(base_url="https://api.example.com/")
        assert config.endpoint_url == "https://api.example.com/openai"

    def test_relative_endpoint_path_made_absolute(self):
        """Test that the endpoint path always starts with a slash."""
        config = GenerationConfig(base_url="https://api.example.com", endpoint_path="forms")
        assert config.endpoint_url == "https://api.example.com/forms"

    def test_unbounded_timeout(self):
        """Test that None disables the timeout."""
        config = GenerationConfig(base_url="https://api.example.com", timeout=None)
        assert config.timeout is None

    def test_invalid_scheme_rejected(self):
        """Test that non-HTTP base URLs fail validation."""
        with pytest.raises(ValueError):
            GenerationConfig(base_url="ftp://api.example.com")

    def test_non_positive_timeout_rejected(self):
        """Test that a zero timeout fails validation."""
        with pytest.raises(ValueError):
            GenerationConfig(base_url="https://api.example.com", timeout=0)


class TestHTTPGenerationClient:
    """Tests for HTTPGenerationClient against a mocked service."""

    @pytest.mark.asyncio
    async def test_posts_topic_once(self, make_http_client, recorded_requests, json_response, nps_payload):
        """Test that one POST carries the prompt as the only body field."""
        async with make_http_client(lambda request: json_response(nps_payload)) as client:
            questions = await client.generate("Create a 3-question NPS survey")

        assert len(questions) == 3
        assert len(recorded_requests) == 1
        request = recorded_requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://forms.test/openai"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"topic": "Create a 3-question NPS survey"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    async def test_empty_prompt_sends_nothing(self, make_http_client, recorded_requests, json_response, prompt):
        """Test that blank prompts fail before any request."""
        async with make_http_client(lambda request: json_response([])) as client:
            with pytest.raises(EmptyInputError):
                await client.generate(prompt)

        assert recorded_requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 404, 500, 503])
    async def test_error_status_raises_service_error(self, make_http_client, recorded_requests, json_response, status_code):
        """Test that non-success statuses map to ServiceError without retry."""
        async with make_http_client(lambda request: json_response({"error": "nope"}, status_code)) as client:
            with pytest.raises(ServiceError) as exc_info:
                await client.generate("Survey")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.kind == ErrorKind.SERVICE
        assert len(recorded_requests) == 1

    @pytest.mark.asyncio
    async def test_invalid_json_raises_malformed(self, make_http_client):
        """Test that an undecodable body is malformed."""
        handler = lambda request: httpx.Response(200, content=b"<html>oops</html>")  # noqa: E731
        async with make_http_client(handler) as client:
            with pytest.raises(MalformedResponseError):
                await client.generate("Survey")

    @pytest.mark.asyncio
    async def test_wrapped_payload_raises_malformed(self, make_http_client, json_response, nps_payload):
        """Test that an object envelope is rejected."""
        async with make_http_client(lambda request: json_response({"questions": nps_payload})) as client:
            with pytest.raises(MalformedResponseError):
                await client.generate("Survey")

    @pytest.mark.asyncio
    async def test_invalid_question_raises_malformed(self, make_http_client, json_response):
        """Test that a multipleChoice question with empty options is rejected."""
        payload = [{"text": "Pick", "type": "multipleChoice", "options": []}]
        async with make_http_client(lambda request: json_response(payload)) as client:
            with pytest.raises(MalformedResponseError) as exc_info:
                await client.generate("Survey")

        assert exc_info.value.kind == ErrorKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_connect_error_raises_network_error(self, make_http_client):
        """Test that an unreachable service maps to NetworkError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_http_client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.generate("Survey")

        assert exc_info.value.kind == ErrorKind.NETWORK

    @pytest.mark.asyncio
    async def test_read_timeout_raises_network_error(self, make_http_client):
        """Test that an httpx timeout maps to NetworkError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_http_client(handler) as client:
            with pytest.raises(NetworkError):
                await client.generate("Survey")

    @pytest.mark.asyncio
    async def test_deadline_raises_network_error(self, make_http_client, json_response, nps_payload):
        """Test that the configured timeout bounds the whole request."""
        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return json_response(nps_payload)

        config = GenerationConfig(base_url="http://forms.test", timeout=0.05)
        async with make_http_client(slow_handler, config=config) as client:
            with pytest.raises(NetworkError, match="0.05"):
                await client.generate("Survey")

    @pytest.mark.asyncio
    async def test_calls_are_independent(self, make_http_client, recorded_requests, json_response, nps_payload):
        """Test that a failed call does not affect the next one."""
        responses = iter([json_response({}, 500), json_response(nps_payload)])
        async with make_http_client(lambda request: next(responses)) as client:
            with pytest.raises(ServiceError):
                await client.generate("First")
            questions = await client.generate("Second")

        assert len(questions) == 3
        assert [json.loads(r.content)["topic"] for r in recorded_requests] == ["First", "Second"]

    @pytest.mark.asyncio
    async def test_debug_callback_receives_trace(self, make_http_client, json_response, nps_payload):
        """Test that request tracing goes through the debug callback."""
        entries: list[tuple[str, str, str]] = []
        async with make_http_client(lambda request: json_response(nps_payload)) as client:
            client.set_debug_callback(lambda level, component, message: entries.append((level, component, message)))
            await client.generate("Survey")

        assert entries
        assert all(component == "HTTP" for _, component, _ in entries)
        assert any("HTTP 200" in message for _, _, message in entries)

"""Unit tests for the chat-completion client.

The upstream is replaced with `httpx.MockTransport`, so every branch of the
error normalization is exercised without network access.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from app.core.llm.openai_client import CompletionRequest
from app.domain.exceptions import UPSTREAM_TIMEOUT_MESSAGE, UpstreamError, UpstreamTimeoutError
from tests._helpers import completion_body, mock_openai_client, sent_payload


def _request(**overrides) -> CompletionRequest:
    values = {
        "system_prompt": "You are a test oracle.",
        "user_prompt": "Is it working?",
        "model": "gpt-4.1",
        "max_tokens": 1400,
        "temperature": 0.85,
        "timeout_seconds": 5.0,
    }
    values.update(overrides)
    return CompletionRequest(**values)


def test_complete_sends_two_message_chat_request() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=completion_body("\n  It works.  \n"))

    client = mock_openai_client(handler, base_url="https://llm.test/v1/")
    text = asyncio.run(client.complete(_request()))

    assert text == "It works."
    assert len(seen) == 1
    assert str(seen[0].url) == "https://llm.test/v1/chat/completions"
    assert seen[0].method == "POST"
    assert seen[0].headers["Authorization"] == "Bearer sk-test"
    assert sent_payload(seen[0]) == {
        "model": "gpt-4.1",
        "messages": [
            {"role": "system", "content": "You are a test oracle."},
            {"role": "user", "content": "Is it working?"},
        ],
        "max_tokens": 1400,
        "temperature": 0.85,
    }


def test_provider_error_message_is_used() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401, json={"error": {"message": "Incorrect API key provided", "code": "invalid_api_key"}}
        )

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(mock_openai_client(handler).complete(_request()))
    assert exc_info.value.message == "Incorrect API key provided"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="Service Unavailable"),
        httpx.Response(503, json={"error": "overloaded"}),
        httpx.Response(503, json={"error": {"message": ""}}),
    ],
)
def test_generic_status_message_without_provider_message(response: httpx.Response) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(mock_openai_client(handler).complete(_request()))
    assert exc_info.value.message == "upstream HTTP 503"
    assert not isinstance(exc_info.value, UpstreamTimeoutError)


@pytest.mark.parametrize(
    "body",
    [
        completion_body(""),
        completion_body("   "),
        completion_body(None),
        {"choices": []},
        {"choices": [{"message": {}}]},
        {},
    ],
)
def test_empty_completion_is_an_error(body: dict) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(mock_openai_client(handler).complete(_request()))
    assert exc_info.value.message == "Empty response from upstream"


def test_non_json_success_body_is_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy page</html>")

    with pytest.raises(UpstreamError):
        asyncio.run(mock_openai_client(handler).complete(_request()))


def test_slow_upstream_is_cancelled_and_reported_as_timeout() -> None:
    cancelled: list[bool] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return httpx.Response(200, json=completion_body("too late"))

    with pytest.raises(UpstreamTimeoutError) as exc_info:
        asyncio.run(mock_openai_client(handler).complete(_request(timeout_seconds=0.05)))

    assert exc_info.value.message == UPSTREAM_TIMEOUT_MESSAGE
    assert cancelled == [True]


def test_transport_timeout_is_reported_as_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(UpstreamTimeoutError):
        asyncio.run(mock_openai_client(handler).complete(_request()))


def test_connection_failure_is_an_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(mock_openai_client(handler).complete(_request()))
    assert exc_info.value.message == "Upstream request failed"
    assert not isinstance(exc_info.value, UpstreamTimeoutError)

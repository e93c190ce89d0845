"""
HTTP contract tests for the Relay provider using httpx.MockTransport.
"""

import json

import httpx
import pytest

from gasless_bridge.core.errors import ExecutionRejected, QuoteRejected, StatusQueryFailed
from gasless_bridge.providers.relay import RelayProvider


BASE_URL = "https://relay.test"


def _provider(handler, api_key="secret-key") -> RelayProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RelayProvider(base_url=BASE_URL, api_key=api_key, timeout_s=5, client=client)


@pytest.mark.asyncio
async def test_quote_uses_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"requestId": "Q1", "steps": []})

    result = await _provider(handler).quote({"amount": "1"})

    assert result["requestId"] == "Q1"
    assert seen["url"] == f"{BASE_URL}/quote"
    assert seen["headers"]["authorization"] == "Bearer secret-key"
    assert "x-api-key" not in seen["headers"]
    assert seen["body"] == {"amount": "1"}


@pytest.mark.asyncio
async def test_quote_without_key_sends_no_authorization():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        return httpx.Response(200, json={"steps": []})

    await _provider(handler, api_key="").quote({})

    assert "authorization" not in seen["headers"]


@pytest.mark.asyncio
async def test_quote_error_carries_status_and_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text='{"message":"Invalid amount"}')

    with pytest.raises(QuoteRejected) as exc_info:
        await _provider(handler).quote({})

    assert exc_info.value.status_code == 400
    assert exc_info.value.body == '{"message":"Invalid amount"}'
    assert "Quote failed (400)" in exc_info.value.message


@pytest.mark.asyncio
async def test_execute_uses_api_key_header():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"message": "Transaction submitted", "requestId": "R1"})

    result = await _provider(handler).execute({"executionKind": "rawCalls"})

    assert result["requestId"] == "R1"
    assert seen["url"] == f"{BASE_URL}/execute"
    assert seen["headers"]["x-api-key"] == "secret-key"
    assert "authorization" not in seen["headers"]


@pytest.mark.asyncio
async def test_execute_error_is_execution_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="unauthorized")

    with pytest.raises(ExecutionRejected) as exc_info:
        await _provider(handler).execute({})

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_execute_requires_api_key():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - never called
        raise AssertionError("request should not be sent")

    with pytest.raises(ExecutionRejected):
        await _provider(handler, api_key="").execute({})


@pytest.mark.asyncio
async def test_status_is_unauthenticated_get():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"status": "pending"})

    result = await _provider(handler).status("R1")

    assert result == {"status": "pending"}
    assert seen["method"] == "GET"
    assert seen["path"] == "/intents/status/v3"
    assert seen["params"] == {"requestId": "R1"}
    assert "x-api-key" not in seen["headers"]
    assert "authorization" not in seen["headers"]


@pytest.mark.asyncio
async def test_status_error_is_status_query_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with pytest.raises(StatusQueryFailed):
        await _provider(handler).status("R1")


@pytest.mark.asyncio
async def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(QuoteRejected) as exc_info:
        await _provider(handler).quote({})

    assert exc_info.value.status_code is None

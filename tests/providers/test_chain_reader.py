"""
Tests for the JSON-RPC chain reader.
"""

import json

import httpx
import pytest

from gasless_bridge.core.errors import ChainReadError
from gasless_bridge.providers.rpc import ChainReader


EOA = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def _reader(handler) -> ChainReader:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChainReader(rpc_url_for=lambda chain_id: f"https://rpc.test/{chain_id}", client=client)


@pytest.mark.asyncio
async def test_get_code_decodes_hex():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0xef0100" + "11" * 20})

    code = await _reader(handler).get_code(EOA, 42161)

    assert code == bytes.fromhex("ef0100" + "11" * 20)
    assert seen["url"] == "https://rpc.test/42161"
    assert seen["body"]["method"] == "eth_getCode"
    assert seen["body"]["params"] == [EOA, "latest"]


@pytest.mark.asyncio
async def test_get_code_empty_account():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x"})

    assert await _reader(handler).get_code(EOA, 1) == b""


@pytest.mark.asyncio
async def test_get_transaction_count():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["method"] == "eth_getTransactionCount"
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x1a"})

    assert await _reader(handler).get_transaction_count(EOA, 1) == 26


@pytest.mark.asyncio
async def test_rpc_error_object_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "bad"}})

    with pytest.raises(ChainReadError):
        await _reader(handler).get_code(EOA, 1)


@pytest.mark.asyncio
async def test_http_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with pytest.raises(ChainReadError):
        await _reader(handler).get_transaction_count(EOA, 1)

import json

import httpx
import pytest

from bounty_board_mcp.board_api.client import (
    BountyBoardClient,
    BountyBoardError,
    RemoteUnreachableError,
)
from bounty_board_mcp.config import BountyBoardConfig


@pytest.mark.asyncio
async def test_fetch_json_merges_headers_with_caller_precedence(make_board_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers.get("content-type")
        seen["trace"] = request.headers.get("x-trace")
        return httpx.Response(200, json={"ok": True})

    client = make_board_client(handler)
    result = await client.fetch_json(
        "/stats", headers={"Content-Type": "text/plain", "X-Trace": "abc"}
    )
    assert result == {"ok": True}
    assert seen == {"content_type": "text/plain", "trace": "abc"}


@pytest.mark.asyncio
async def test_fetch_json_sends_default_content_type(make_board_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers.get("content-type")
        seen["url"] = str(request.url)
        return httpx.Response(200, json=[])

    client = make_board_client(handler)
    assert await client.fetch_bounties() == []
    assert seen["content_type"] == "application/json"
    assert seen["url"] == "https://board.test/bounties"


@pytest.mark.asyncio
async def test_fetch_json_non_success_carries_status_and_body(make_board_client):
    client = make_board_client(lambda request: httpx.Response(503, text="maintenance"))
    with pytest.raises(BountyBoardError) as excinfo:
        await client.fetch_stats()
    assert excinfo.value.status_code == 503
    assert str(excinfo.value) == "API error 503: maintenance"


@pytest.mark.asyncio
async def test_fetch_json_invalid_body(make_board_client):
    client = make_board_client(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(BountyBoardError, match="Unexpected response"):
        await client.fetch_json("/bounties")


@pytest.mark.asyncio
async def test_fetch_bounties_rejects_non_list(make_board_client):
    client = make_board_client(lambda request: httpx.Response(200, json={"bounties": []}))
    with pytest.raises(BountyBoardError):
        await client.fetch_bounties()


@pytest.mark.asyncio
async def test_unreachable_maps_error(make_board_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    client = make_board_client(handler)
    with pytest.raises(RemoteUnreachableError):
        await client.fetch_bounties()


@pytest.mark.asyncio
async def test_claim_posts_body_and_returns_message(make_board_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": "ok"})

    client = make_board_client(handler)
    assert await client.claim("24", "0xabc", "kevin") == "ok"
    assert seen == {
        "method": "POST",
        "path": "/bounties/24/claim",
        "body": {"wallet": "0xabc", "name": "kevin"},
    }


@pytest.mark.asyncio
async def test_claim_omits_missing_name(make_board_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={})

    client = make_board_client(handler)
    assert await client.claim("24", "0xabc") is None
    assert seen["body"] == {"wallet": "0xabc"}


@pytest.mark.asyncio
async def test_claim_encodes_bounty_id(make_board_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["raw_path"] = request.url.raw_path
        return httpx.Response(200, json={})

    client = make_board_client(handler)
    await client.claim("a/b", "0xabc")
    assert seen["raw_path"] == b"/bounties/a%2Fb/claim"


@pytest.mark.asyncio
async def test_submit_body_uses_camel_case(make_board_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"message": "received"})

    client = make_board_client(handler)
    result = await client.submit("7", "0xabc", "https://github.com/x/y", "Built it")
    assert result == "received"
    assert seen == {
        "path": "/bounties/7/submit",
        "body": {"wallet": "0xabc", "proofUrl": "https://github.com/x/y", "description": "Built it"},
    }


@pytest.mark.asyncio
async def test_post_failure_uses_remote_message(make_board_client):
    client = make_board_client(lambda request: httpx.Response(409, json={"message": "Already claimed"}))
    with pytest.raises(BountyBoardError) as excinfo:
        await client.claim("24", "0xabc")
    assert str(excinfo.value) == "Already claimed"
    assert excinfo.value.status_code == 409


@pytest.mark.asyncio
async def test_post_failure_falls_back_without_message(make_board_client):
    client = make_board_client(lambda request: httpx.Response(500, text="oops"))
    with pytest.raises(BountyBoardError, match="^Claim failed$"):
        await client.claim("24", "0xabc")
    with pytest.raises(BountyBoardError, match="^Submission failed$"):
        await client.submit("24", "0xabc", "https://x", "d")


@pytest.mark.asyncio
async def test_aclose_closes_owned_client():
    client = BountyBoardClient(BountyBoardConfig(base_url="https://board.test"))
    created = await client._get_client()
    assert isinstance(created, httpx.AsyncClient)
    await client.aclose()
    assert client._client is None


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open():
    injected = httpx.AsyncClient(base_url="https://board.test")
    client = BountyBoardClient(async_client=injected)
    await client.aclose()
    assert not injected.is_closed
    await injected.aclose()

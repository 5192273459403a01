"""Subgraph market index client."""

from __future__ import annotations

import json

import httpx

from freemarket_claims.index.subgraph import SubgraphMarketIndex

from tests.factories import make_index_config

SUBGRAPH_URL = "http://subgraph.test/graphql"


def _index(handler) -> SubgraphMarketIndex:
    return SubgraphMarketIndex(SUBGRAPH_URL, request_timeout=1, transport=httpx.MockTransport(handler))


async def test_free_market_lookup():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"data": {"market": {
            "id": "7",
            "marketType": "FREE",
            "freeMarketConfig": make_index_config(currentFreeParticipants="10"),
        }}})

    market = await _index(handler).get_market(7)

    assert market.market_id == 7
    assert market.market_type == "FREE"
    assert market.free_market_config["currentFreeParticipants"] == "10"
    assert seen[0]["variables"] == {"id": "7"}
    assert "freeMarketConfig" in seen[0]["query"]


async def test_paid_market_without_config():
    def handler(request):
        return httpx.Response(200, json={"data": {"market": {
            "id": "8", "marketType": "PAID", "freeMarketConfig": None,
        }}})

    market = await _index(handler).get_market(8)

    assert market.market_type == "PAID"
    assert market.free_market_config is None


async def test_unknown_market():
    def handler(request):
        return httpx.Response(200, json={"data": {"market": None}})

    assert await _index(handler).get_market(99) is None


async def test_http_error_returns_none(caplog):
    def handler(request):
        return httpx.Response(503, text="upstream unavailable")

    assert await _index(handler).get_market(7) is None
    assert "Subgraph lookup for market 7 failed" in caplog.text


async def test_connection_error_returns_none():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    assert await _index(handler).get_market(7) is None


async def test_graphql_errors_return_none():
    def handler(request):
        return httpx.Response(200, json={"errors": [{"message": "indexing_error"}]})

    assert await _index(handler).get_market(7) is None


async def test_missing_market_type_returns_none():
    def handler(request):
        return httpx.Response(200, json={"data": {"market": {"id": "7"}}})

    assert await _index(handler).get_market(7) is None


async def test_non_json_body_returns_none():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    assert await _index(handler).get_market(7) is None


async def test_unconfigured_url_skips_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    index = SubgraphMarketIndex("", transport=httpx.MockTransport(handler))

    assert await index.get_market(7) is None
    assert calls == []

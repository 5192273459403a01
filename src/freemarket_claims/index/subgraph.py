"""Subgraph client - the secondary, eventually-consistent market index."""

from __future__ import annotations

import logging

import httpx

from freemarket_claims.errors import MalformedSource, TransportError
from freemarket_claims.models.market import IndexedMarket

log = logging.getLogger(__name__)

MARKET_QUERY = """
query Market($id: ID!) {
  market(id: $id) {
    id
    marketType
    freeMarketConfig {
      maxFreeParticipants
      tokensPerParticipant
      currentFreeParticipants
      totalPrizePool
      remainingPrizePool
      isActive
    }
  }
}
"""


def _parse_market(market_id: int, body: dict) -> IndexedMarket | None:
    if body.get("errors"):
        raise MalformedSource(f"graphql errors: {body['errors']}")
    data = body.get("data")
    if not isinstance(data, dict):
        raise MalformedSource("response has no data")
    raw = data.get("market")
    if raw is None:
        return None
    market_type = raw.get("marketType")
    if not isinstance(market_type, str):
        raise MalformedSource(f"marketType missing for market {market_id}")
    config = raw.get("freeMarketConfig")
    return IndexedMarket(
        market_id=market_id,
        market_type=market_type,
        free_market_config=dict(config) if isinstance(config, dict) else None,
    )


class SubgraphMarketIndex:
    """Fetches markets from a GraphQL subgraph endpoint.

    Unreachable endpoints and malformed responses are logged and reported
    as None, never raised to the caller.
    """

    def __init__(
        self,
        subgraph_url: str,
        request_timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = subgraph_url
        self._timeout = request_timeout
        self._transport = transport

    async def _post(self, payload: dict) -> dict:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.post(self._url, json=payload)
                resp.raise_for_status()
                return resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(f"subgraph request failed: {exc}") from exc

    async def get_market(self, market_id: int) -> IndexedMarket | None:
        if not self._url:
            return None
        try:
            body = await self._post(
                {"query": MARKET_QUERY, "variables": {"id": str(market_id)}},
            )
            return _parse_market(market_id, body)
        except (TransportError, MalformedSource) as exc:
            log.warning("Subgraph lookup for market %d failed: %s", market_id, exc)
            return None

"""MarketIndex protocol - best-effort secondary index of markets."""

from __future__ import annotations

from typing import Protocol

from freemarket_claims.models.market import IndexedMarket


class MarketIndex(Protocol):
    """Eventually-consistent mirror of on-chain markets."""

    async def get_market(self, market_id: int) -> IndexedMarket | None:
        """Return the indexed market, or None if unknown or unreachable."""
        ...

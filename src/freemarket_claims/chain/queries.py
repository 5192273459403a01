"""Contract query helpers over a generic chain reader."""

from __future__ import annotations

import logging

from freemarket_claims.interfaces.chain import ChainReader
from freemarket_claims.models.market import ClaimRecord, FreeMarketSnapshot

log = logging.getLogger(__name__)


class FreeMarketQueries:
    """Read-only queries against the prediction market contract.

    Every failure is logged and returned as None; callers treat None as
    "no data" and keep reconciling.
    """

    def __init__(self, reader: ChainReader, contract_address: str) -> None:
        self._reader = reader
        self._contract_address = contract_address

    @property
    def contract_address(self) -> str:
        return self._contract_address

    async def get_free_market_info(self, market_id: int) -> FreeMarketSnapshot | None:
        """Query ``getFreeMarketInfo(marketId)``."""
        try:
            raw = await self._reader.read(
                self._contract_address, "getFreeMarketInfo", [market_id],
            )
            if raw is None:
                return None
            return FreeMarketSnapshot.from_tuple(raw)
        except Exception as exc:
            log.warning("getFreeMarketInfo(%d) failed: %s", market_id, exc)
            return None

    async def get_claim_status(self, market_id: int, wallet_address: str) -> ClaimRecord | None:
        """Query ``hasUserClaimedFreeTokens(marketId, wallet)``."""
        try:
            raw = await self._reader.read(
                self._contract_address,
                "hasUserClaimedFreeTokens",
                [market_id, wallet_address],
            )
            if raw is None:
                return None
            has_claimed, tokens_received = raw
            return ClaimRecord(
                wallet_address=wallet_address,
                has_claimed=bool(has_claimed),
                tokens_received=int(tokens_received),
            )
        except Exception as exc:
            log.warning(
                "hasUserClaimedFreeTokens(%d, %s) failed: %s", market_id, wallet_address[:10], exc,
            )
            return None

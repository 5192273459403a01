"""Market data as read from the contract and from the subgraph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

TOKEN_DECIMALS = 18
FREE_MARKET_TYPE = 1  # MarketType.FREE in the contract enum
INDEX_FREE_MARKET_TYPE = "FREE"


@dataclass(frozen=True)
class FreeMarketConfig:
    """Reconciled free-entry configuration of one market."""

    max_participants: int
    current_participants: int
    tokens_per_participant: int  # 18-decimal fixed point
    total_prize_pool: int
    remaining_prize_pool: int
    is_active: bool

    @property
    def slots_remaining(self) -> int:
        return self.max_participants - self.current_participants


@dataclass(frozen=True)
class FreeMarketSnapshot:
    """Result of ``getFreeMarketInfo(marketId)``.

    The contract returns
    ``(maxFreeParticipants, tokensPerParticipant, currentFreeParticipants,
    totalPrizePool, remainingPrizePool, isActive)``.
    """

    max_participants: int
    tokens_per_participant: int
    current_participants: int
    total_prize_pool: int
    remaining_prize_pool: int
    is_active: bool

    @classmethod
    def from_tuple(cls, raw: tuple | list) -> FreeMarketSnapshot:
        max_p, per_p, current, total_pool, remaining_pool, active = raw
        return cls(
            max_participants=int(max_p),
            tokens_per_participant=int(per_p),
            current_participants=int(current),
            total_prize_pool=int(total_pool),
            remaining_prize_pool=int(remaining_pool),
            is_active=bool(active),
        )


@dataclass(frozen=True)
class IndexedMarket:
    """A market as mirrored by the subgraph. Values may be stale."""

    market_id: int
    market_type: str  # "FREE", "PAID", ...
    free_market_config: dict[str, Any] | None = field(default=None, hash=False)


@dataclass(frozen=True)
class ClaimRecord:
    """Result of ``hasUserClaimedFreeTokens(marketId, wallet)``."""

    wallet_address: str
    has_claimed: bool
    tokens_received: int = 0

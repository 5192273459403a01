"""Synthetic source records for testing."""

from __future__ import annotations

from freemarket_claims.models.market import (
    ClaimRecord,
    FreeMarketSnapshot,
    IndexedMarket,
)

ONE_TOKEN = 10**18
WALLET = "0x1111111111111111111111111111111111111111"
OTHER_WALLET = "0x2222222222222222222222222222222222222222"


def make_free_info(
    max_participants: int = 100,
    tokens_per_participant: int = 5 * ONE_TOKEN,
    current_participants: int = 40,
    total_prize_pool: int = 500 * ONE_TOKEN,
    remaining_prize_pool: int = 300 * ONE_TOKEN,
    is_active: bool = True,
) -> FreeMarketSnapshot:
    return FreeMarketSnapshot(
        max_participants=max_participants,
        tokens_per_participant=tokens_per_participant,
        current_participants=current_participants,
        total_prize_pool=total_prize_pool,
        remaining_prize_pool=remaining_prize_pool,
        is_active=is_active,
    )


def free_info_tuple(**overrides) -> tuple:
    """The raw getFreeMarketInfo() return value."""
    s = make_free_info(**overrides)
    return (
        s.max_participants,
        s.tokens_per_participant,
        s.current_participants,
        s.total_prize_pool,
        s.remaining_prize_pool,
        s.is_active,
    )


def make_index_config(**overrides) -> dict:
    config = {
        "maxFreeParticipants": "100",
        "tokensPerParticipant": str(5 * ONE_TOKEN),
        "currentFreeParticipants": "40",
        "totalPrizePool": str(500 * ONE_TOKEN),
        "remainingPrizePool": str(300 * ONE_TOKEN),
        "isActive": True,
    }
    config.update(overrides)
    return config


def make_indexed_market(
    market_id: int = 7,
    market_type: str = "FREE",
    config: dict | None = None,
    with_config: bool = True,
) -> IndexedMarket:
    return IndexedMarket(
        market_id=market_id,
        market_type=market_type,
        free_market_config=(config if config is not None else make_index_config()) if with_config else None,
    )


def make_claim_record(
    has_claimed: bool = True,
    tokens_received: int = 5 * ONE_TOKEN,
    wallet_address: str = WALLET,
) -> ClaimRecord:
    return ClaimRecord(
        wallet_address=wallet_address,
        has_claimed=has_claimed,
        tokens_received=tokens_received,
    )

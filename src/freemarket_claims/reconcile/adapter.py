"""Config source adapter - merges the contract snapshot and the subgraph record.

The on-chain snapshot is authoritative for every field. Fields are never
merged across sources, so stale subgraph counts cannot leak into a fresh
on-chain read.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from freemarket_claims.debuglog import silent_logger
from freemarket_claims.errors import MalformedSource
from freemarket_claims.models.market import (
    FREE_MARKET_TYPE,
    INDEX_FREE_MARKET_TYPE,
    FreeMarketConfig,
    FreeMarketSnapshot,
    IndexedMarket,
)

UINT256_MAX = 2**256 - 1
UINT256_DIGITS = len(str(UINT256_MAX))


def _parse_uint(raw: Mapping[str, Any], key: str, default: int | None = None) -> int:
    value = raw.get(key)
    if value is None:
        if default is None:
            raise MalformedSource(f"missing {key}")
        return default
    if isinstance(value, bool):
        raise MalformedSource(f"{key} is not an integer: {value!r}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        digits = value.strip()
        if len(digits.lstrip("0")) > UINT256_DIGITS:
            raise MalformedSource(f"{key} exceeds uint256: {digits[:20]}...")
        try:
            parsed = int(digits)
        except ValueError as exc:
            raise MalformedSource(f"{key} is not an unsigned integer: {digits[:20]!r}") from exc
    else:
        raise MalformedSource(f"{key} is not an unsigned integer: {value!r}")
    if parsed < 0:
        raise MalformedSource(f"{key} is negative: {parsed}")
    if parsed > UINT256_MAX:
        raise MalformedSource(f"{key} exceeds uint256")
    return parsed


def _parse_bool(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise MalformedSource(f"{key} is not a boolean: {value!r}")


def _from_snapshot(snapshot: FreeMarketSnapshot) -> FreeMarketConfig:
    values = (
        snapshot.max_participants,
        snapshot.current_participants,
        snapshot.tokens_per_participant,
        snapshot.total_prize_pool,
        snapshot.remaining_prize_pool,
    )
    if any(v < 0 for v in values):
        raise MalformedSource(f"negative value in contract snapshot: {values}")
    return FreeMarketConfig(
        max_participants=snapshot.max_participants,
        current_participants=snapshot.current_participants,
        tokens_per_participant=snapshot.tokens_per_participant,
        total_prize_pool=snapshot.total_prize_pool,
        remaining_prize_pool=snapshot.remaining_prize_pool,
        is_active=snapshot.is_active,
    )


def _from_index(raw: Mapping[str, Any]) -> FreeMarketConfig:
    return FreeMarketConfig(
        max_participants=_parse_uint(raw, "maxFreeParticipants"),
        current_participants=_parse_uint(raw, "currentFreeParticipants"),
        tokens_per_participant=_parse_uint(raw, "tokensPerParticipant"),
        total_prize_pool=_parse_uint(raw, "totalPrizePool", default=0),
        remaining_prize_pool=_parse_uint(raw, "remainingPrizePool", default=0),
        is_active=_parse_bool(raw, "isActive", default=True),
    )


def resolve_free_market_config(
    snapshot: FreeMarketSnapshot | None,
    indexed: IndexedMarket | None,
    log: logging.Logger | None = None,
) -> FreeMarketConfig | None:
    """Produce the market's free-entry config, or None while unresolved.

    A malformed source, or one claiming more participants than slots,
    yields None rather than a partial config.
    """
    log = log or silent_logger()

    try:
        if snapshot is not None:
            config = _from_snapshot(snapshot)
            source = "contract"
        elif indexed is not None and indexed.free_market_config:
            config = _from_index(indexed.free_market_config)
            source = "subgraph"
        else:
            log.debug("free market config unresolved: no source available")
            return None
    except MalformedSource as exc:
        log.warning("Discarding malformed free market config: %s", exc)
        return None

    if config.current_participants > config.max_participants:
        log.warning(
            "Discarding %s config: %d participants exceed %d slots",
            source, config.current_participants, config.max_participants,
        )
        return None

    log.debug("free market config from %s: %s", source, config)
    return config


def resolve_is_free_market(
    market_type: int | None,
    indexed: IndexedMarket | None,
) -> bool | None:
    """Whether the market is free-entry; None when nothing is known yet.

    A caller-supplied contract market type bypasses the subgraph's field.
    """
    if market_type is not None:
        return market_type == FREE_MARKET_TYPE
    if indexed is not None:
        return indexed.market_type == INDEX_FREE_MARKET_TYPE
    return None

"""Two-stage reconciliation over one batched snapshot of every input."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from freemarket_claims.models.eligibility import EligibilityState
from freemarket_claims.models.market import (
    ClaimRecord,
    FreeMarketConfig,
    FreeMarketSnapshot,
    IndexedMarket,
)
from freemarket_claims.reconcile.adapter import (
    resolve_free_market_config,
    resolve_is_free_market,
)
from freemarket_claims.reconcile.resolver import resolve_eligibility


@dataclass(frozen=True)
class SourceSnapshot:
    """Latest value of every input, captured together.

    ``claim_record`` is only honoured when it belongs to ``wallet_address``.
    """

    market_id: int
    wallet_address: str | None = None
    market_type: int | None = None
    indexed: IndexedMarket | None = None
    free_info: FreeMarketSnapshot | None = None
    claim_record: ClaimRecord | None = None

    @property
    def wallet_claim_record(self) -> ClaimRecord | None:
        record = self.claim_record
        if record is None or self.wallet_address is None:
            return None
        if record.wallet_address.lower() != self.wallet_address.lower():
            return None
        return record


@dataclass(frozen=True)
class Reconciliation:
    config: FreeMarketConfig | None
    is_free_market: bool | None
    eligibility: EligibilityState

    @property
    def tokens_per_participant(self) -> int:
        return self.config.tokens_per_participant if self.config else 0


def reconcile(snapshot: SourceSnapshot, log: logging.Logger | None = None) -> Reconciliation:
    """Run adapter then resolver on a single snapshot."""
    config = resolve_free_market_config(snapshot.free_info, snapshot.indexed, log=log)
    is_free = resolve_is_free_market(snapshot.market_type, snapshot.indexed)
    eligibility = resolve_eligibility(
        config,
        snapshot.wallet_claim_record,
        wallet_connected=snapshot.wallet_address is not None,
        is_free_market=is_free,
        log=log,
    )
    return Reconciliation(config=config, is_free_market=is_free, eligibility=eligibility)

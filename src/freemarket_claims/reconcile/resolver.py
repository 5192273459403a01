"""Entitlement resolver - one eligibility state per input combination."""

from __future__ import annotations

import logging

from freemarket_claims.debuglog import silent_logger
from freemarket_claims.models.eligibility import (
    Available,
    Claimed,
    Disconnected,
    EligibilityState,
    Exhausted,
    NotApplicable,
    Unresolved,
)
from freemarket_claims.models.market import ClaimRecord, FreeMarketConfig


def resolve_eligibility(
    config: FreeMarketConfig | None,
    claim_record: ClaimRecord | None,
    wallet_connected: bool,
    is_free_market: bool | None,
    log: logging.Logger | None = None,
) -> EligibilityState:
    """Resolve eligibility. First matching rule wins:

    1. not a free-entry market       -> NotApplicable
    2. free-ness or config unknown   -> Unresolved
    3. wallet already claimed        -> Claimed
    4. no wallet                     -> Disconnected
    5. slots left                    -> Available
    6. otherwise                     -> Exhausted
    """
    log = log or silent_logger()

    if is_free_market is False:
        state: EligibilityState = NotApplicable()
    elif is_free_market is None or config is None:
        state = Unresolved()
    elif claim_record is not None and claim_record.has_claimed:
        state = Claimed(tokens_received=claim_record.tokens_received)
    elif not wallet_connected:
        state = Disconnected()
    elif config.slots_remaining > 0:
        state = Available(
            tokens_per_participant=config.tokens_per_participant,
            slots_remaining=config.slots_remaining,
            max_participants=config.max_participants,
        )
    else:
        state = Exhausted(max_participants=config.max_participants)

    log.debug(
        "eligibility=%s (free=%s, config=%s, claimed=%s, connected=%s)",
        state.kind,
        is_free_market,
        config is not None,
        claim_record.has_claimed if claim_record else None,
        wallet_connected,
    )
    return state

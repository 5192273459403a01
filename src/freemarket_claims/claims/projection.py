"""Render projection - eligibility + claim state to a badge view model."""

from __future__ import annotations

from freemarket_claims.models.eligibility import (
    Available,
    Claimed,
    Disconnected,
    EligibilityState,
    Exhausted,
    NotApplicable,
    Unresolved,
)
from freemarket_claims.models.records import ClaimTransactionState
from freemarket_claims.models.view import BadgeVariant, ClaimStatusView
from freemarket_claims.units import format_tokens


def project(
    eligibility: EligibilityState,
    tx_state: ClaimTransactionState | None = None,
) -> ClaimStatusView:
    tx_state = tx_state or ClaimTransactionState()
    busy = tx_state.busy

    if isinstance(eligibility, NotApplicable):
        return ClaimStatusView(visible=False, badge_variant=BadgeVariant.NONE, busy=busy)

    if isinstance(eligibility, Unresolved):
        return ClaimStatusView(
            visible=True,
            badge_variant=BadgeVariant.LOADING,
            badge_label="Loading…",
            busy=busy,
        )

    if isinstance(eligibility, Claimed):
        return ClaimStatusView(
            visible=True,
            badge_variant=BadgeVariant.CLAIMED,
            badge_label=f"Claimed {format_tokens(eligibility.tokens_received)} tokens",
            busy=busy,
        )

    if isinstance(eligibility, Disconnected):
        return ClaimStatusView(
            visible=True,
            badge_variant=BadgeVariant.PROMPT,
            badge_label="Connect to claim free shares",
            busy=busy,
        )

    if isinstance(eligibility, Available):
        return ClaimStatusView(
            visible=True,
            badge_variant=BadgeVariant.AVAILABLE,
            badge_label=f"{format_tokens(eligibility.tokens_per_participant)} tokens available",
            action_visible=True,
            action_enabled=not busy,
            action_label="Claiming..." if busy else "Claim",
            busy=busy,
            slots_label=f"{eligibility.slots_remaining}/{eligibility.max_participants}",
        )

    if isinstance(eligibility, Exhausted):
        return ClaimStatusView(
            visible=True,
            badge_variant=BadgeVariant.EXHAUSTED,
            badge_label="All slots claimed",
            busy=busy,
            slots_label=f"0/{eligibility.max_participants}",
        )

    raise TypeError(f"unknown eligibility state: {eligibility!r}")

"""Source reconciliation: adapter, resolver and the batched pipeline."""

from freemarket_claims.reconcile.adapter import (
    resolve_free_market_config,
    resolve_is_free_market,
)
from freemarket_claims.reconcile.resolver import resolve_eligibility
from freemarket_claims.reconcile.pipeline import Reconciliation, SourceSnapshot, reconcile

__all__ = [
    "resolve_free_market_config",
    "resolve_is_free_market",
    "resolve_eligibility",
    "Reconciliation",
    "SourceSnapshot",
    "reconcile",
]

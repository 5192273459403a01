"""Claim transaction lifecycle, projection and monitoring."""

from freemarket_claims.claims.controller import ClaimTransactionController
from freemarket_claims.claims.monitor import FreeMarketClaimMonitor
from freemarket_claims.claims.projection import project

__all__ = ["ClaimTransactionController", "FreeMarketClaimMonitor", "project"]

"""Data models for freemarket_claims."""

from freemarket_claims.models.config import (
    ChainConfig,
    ClaimsConfig,
    IndexConfig,
    WebhookConfig,
)
from freemarket_claims.models.market import (
    ClaimRecord,
    FreeMarketConfig,
    FreeMarketSnapshot,
    IndexedMarket,
)
from freemarket_claims.models.eligibility import (
    Available,
    Claimed,
    Disconnected,
    EligibilityState,
    Exhausted,
    NotApplicable,
    Unresolved,
)
from freemarket_claims.models.records import (
    ClaimPhase,
    ClaimTransactionState,
    Notification,
    NotificationDetails,
    NotificationKind,
    TxReceipt,
    TxStatus,
    WebhookEvent,
)
from freemarket_claims.models.view import BadgeVariant, ClaimStatusView

__all__ = [
    "ChainConfig", "ClaimsConfig", "IndexConfig", "WebhookConfig",
    "ClaimRecord", "FreeMarketConfig", "FreeMarketSnapshot", "IndexedMarket",
    "Available", "Claimed", "Disconnected", "EligibilityState", "Exhausted",
    "NotApplicable", "Unresolved",
    "ClaimPhase", "ClaimTransactionState", "Notification", "NotificationDetails",
    "NotificationKind", "TxReceipt", "TxStatus", "WebhookEvent",
    "BadgeVariant", "ClaimStatusView",
]

"""Operation results and transaction lifecycle records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ClaimPhase(str, Enum):
    """Lifecycle of one claim attempt."""

    IDLE = "idle"
    SUBMITTING = "submitting"  # waiting for the wallet / node to accept the tx
    CONFIRMING = "confirming"  # tx hash known, waiting for the receipt
    CONFIRMED = "confirmed"
    FAILED = "failed"


BUSY_PHASES = frozenset({ClaimPhase.SUBMITTING, ClaimPhase.CONFIRMING})


@dataclass(frozen=True)
class ClaimTransactionState:
    """Point-in-time view of a claim attempt."""

    phase: ClaimPhase = ClaimPhase.IDLE
    tx_hash: str | None = None
    reason: str | None = None  # set when phase is FAILED

    @property
    def busy(self) -> bool:
        return self.phase in BUSY_PHASES


class TxStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class TxReceipt:
    """Finality outcome of a submitted transaction."""

    tx_hash: str
    status: TxStatus
    block_number: int | None = None


class NotificationKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Notification:
    """A user-visible toast emitted by the claim controller."""

    kind: NotificationKind
    title: str
    description: str


@dataclass(frozen=True)
class NotificationDetails:
    """Push-notification endpoint registered for a Farcaster user."""

    url: str
    token: str


@dataclass(frozen=True)
class WebhookEvent:
    """A verified Farcaster mini-app webhook event."""

    fid: int
    event: str  # "frame_added", "frame_removed", ...
    app_key: str
    notification_details: NotificationDetails | None = None

"""Claim transaction controller - submits claimFreeTokens() and tracks it to finality."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from freemarket_claims.debuglog import silent_logger
from freemarket_claims.interfaces.chain import ChainWriter, ConfirmationWatcher
from freemarket_claims.interfaces.notify import NotificationSink
from freemarket_claims.models.records import (
    BUSY_PHASES,
    ClaimPhase,
    ClaimTransactionState,
    Notification,
    NotificationKind,
    TxStatus,
)
from freemarket_claims.units import format_tokens

CLAIM_FUNCTION = "claimFreeTokens"

FAILURE_TITLE = "Claim Failed"
DEFAULT_FAILURE_REASON = "Failed to claim free shares"
REVERTED_REASON = "Transaction reverted"
SUCCESS_TITLE = "Tokens Claimed Successfully! 🎉"


def _reason(exc: BaseException) -> str:
    return str(exc) or DEFAULT_FAILURE_REASON


class ClaimTransactionController:
    """State machine for one wallet's claim on one market.

    IDLE -> SUBMITTING -> CONFIRMING -> CONFIRMED | FAILED

    The success notification fires once per ``submit()``, the first time the
    controller is CONFIRMED with a non-zero token allocation known. Later
    ``observe()`` calls (one per update cycle) never repeat it.

    A ``submit()`` while SUBMITTING or CONFIRMING is ignored. Callers must
    still disable their claim action while ``state.busy`` is set; the
    controller does not queue or merge concurrent attempts.
    """

    def __init__(
        self,
        market_id: int,
        wallet_address: str,
        contract_address: str,
        writer: ChainWriter,
        watcher: ConfirmationWatcher,
        sink: NotificationSink,
        on_transition: Callable[[ClaimTransactionState], None] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.market_id = market_id
        self.wallet_address = wallet_address
        self._contract_address = contract_address
        self._writer = writer
        self._watcher = watcher
        self._sink = sink
        self._on_transition = on_transition
        self._log = log or silent_logger()

        self._phase = ClaimPhase.IDLE
        self._tx_hash: str | None = None
        self._reason: str | None = None
        self._notified = False
        self._tokens_per_participant = 0
        self._closed = False

    @property
    def state(self) -> ClaimTransactionState:
        return ClaimTransactionState(
            phase=self._phase, tx_hash=self._tx_hash, reason=self._reason,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def owns(self, market_id: int, wallet_address: str | None) -> bool:
        """True if this controller belongs to the (market, wallet) pair."""
        return (
            wallet_address is not None
            and market_id == self.market_id
            and wallet_address.lower() == self.wallet_address.lower()
        )

    # ── Transitions ────────────────────────────────────────

    async def submit(self, tokens_per_participant: int | None = None) -> ClaimTransactionState:
        """Submit a claim and wait for its outcome."""
        if self._closed:
            self._log.debug("submit ignored: controller closed")
            return self.state
        if self._phase in BUSY_PHASES:
            self._log.debug("submit ignored: claim already %s", self._phase.value)
            return self.state

        if tokens_per_participant is not None:
            self._tokens_per_participant = tokens_per_participant
        self._notified = False
        self._tx_hash = None
        self._reason = None
        self._set_phase(ClaimPhase.SUBMITTING)
        self._log.debug(
            "claiming free tokens: market=%d wallet=%s", self.market_id, self.wallet_address,
        )

        try:
            tx_hash = await self._writer.write(
                self._contract_address, CLAIM_FUNCTION, [self.market_id],
            )
        except asyncio.CancelledError:
            self._abandon()
            raise
        except Exception as exc:
            self._fail(_reason(exc))
            return self.state

        if self._closed:
            return self.state

        self._tx_hash = tx_hash
        self._set_phase(ClaimPhase.CONFIRMING)
        self._log.debug("claim submitted: tx=%s", tx_hash)

        try:
            receipt = await self._watcher.await_confirmation(tx_hash)
        except asyncio.CancelledError:
            self._abandon()
            raise
        except Exception as exc:
            self._fail(_reason(exc))
            return self.state

        if self._closed:
            return self.state

        if receipt.status != TxStatus.SUCCESS:
            self._fail(REVERTED_REASON)
            return self.state

        self._set_phase(ClaimPhase.CONFIRMED)
        self._log.debug("claim confirmed: tx=%s block=%s", tx_hash, receipt.block_number)
        self.observe()
        return self.state

    def observe(self, tokens_per_participant: int | None = None) -> None:
        """Re-evaluate after an update cycle; emits the pending success once."""
        if tokens_per_participant is not None:
            self._tokens_per_participant = tokens_per_participant
        if (
            self._phase == ClaimPhase.CONFIRMED
            and not self._notified
            and self._tokens_per_participant > 0
        ):
            self._notified = True
            self._emit(Notification(
                kind=NotificationKind.SUCCESS,
                title=SUCCESS_TITLE,
                description=(
                    f"You've claimed {format_tokens(self._tokens_per_participant)} "
                    "tokens for this free market."
                ),
            ))

    def acknowledge(self) -> None:
        """Return a FAILED claim to IDLE so it can be retried."""
        if self._phase == ClaimPhase.FAILED:
            self._reason = None
            self._set_phase(ClaimPhase.IDLE)

    def close(self) -> None:
        """Tear down. Nothing is emitted after this."""
        self._closed = True

    # ── Internals ──────────────────────────────────────────

    def _fail(self, reason: str) -> None:
        if self._closed:
            return
        self._reason = reason
        self._set_phase(ClaimPhase.FAILED)
        self._log.debug("claim failed: %s", reason)
        self._emit(Notification(
            kind=NotificationKind.FAILURE,
            title=FAILURE_TITLE,
            description=reason,
        ))

    def _set_phase(self, phase: ClaimPhase) -> None:
        self._phase = phase
        if self._on_transition is not None and not self._closed:
            self._on_transition(self.state)

    def _abandon(self) -> None:
        self._closed = True
        self._log.debug("claim abandoned in phase %s", self._phase.value)

    def _emit(self, notification: Notification) -> None:
        if self._closed:
            self._log.debug("notification discarded after close: %s", notification.title)
            return
        self._sink.notify(notification)

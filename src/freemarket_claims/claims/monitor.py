"""Claim status monitor - polls both sources and keeps the view current."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from freemarket_claims.chain.queries import FreeMarketQueries
from freemarket_claims.claims.controller import ClaimTransactionController
from freemarket_claims.claims.projection import project
from freemarket_claims.debuglog import silent_logger
from freemarket_claims.interfaces.chain import ChainWriter, ConfirmationWatcher
from freemarket_claims.interfaces.index import MarketIndex
from freemarket_claims.interfaces.notify import NotificationSink
from freemarket_claims.interfaces.wallet import WalletContext
from freemarket_claims.models.market import ClaimRecord, FreeMarketSnapshot, IndexedMarket
from freemarket_claims.models.records import ClaimTransactionState
from freemarket_claims.models.view import ClaimStatusView
from freemarket_claims.reconcile.adapter import resolve_is_free_market
from freemarket_claims.reconcile.pipeline import Reconciliation, SourceSnapshot, reconcile

log = logging.getLogger(__name__)


class FreeMarketClaimMonitor:
    """Keeps one market's claim status view in sync with its data sources.

    Three loops run every ``poll_interval`` seconds:
    1. subgraph market lookup (always)
    2. ``getFreeMarketInfo`` (while the market is known to be free-entry)
    3. ``hasUserClaimedFreeTokens`` (while a wallet is connected)

    A failed fetch keeps the last good value. After every fetch the view is
    recomputed from one snapshot of all inputs and ``on_update`` is called
    if it changed.
    """

    def __init__(
        self,
        market_id: int,
        queries: FreeMarketQueries,
        index: MarketIndex,
        wallet: WalletContext,
        writer: ChainWriter,
        watcher: ConfirmationWatcher,
        sink: NotificationSink,
        market_type: int | None = None,
        poll_interval: float = 10,
        on_update: Callable[[ClaimStatusView], None] | None = None,
        core_log: logging.Logger | None = None,
    ) -> None:
        self.market_id = market_id
        self._queries = queries
        self._index = index
        self._wallet = wallet
        self._writer = writer
        self._watcher = watcher
        self._sink = sink
        self._market_type = market_type
        self._poll_interval = poll_interval
        self._on_update = on_update
        self._core_log = core_log or silent_logger()

        self._indexed: IndexedMarket | None = None
        self._free_info: FreeMarketSnapshot | None = None
        self._claim_record: ClaimRecord | None = None

        self._controller: ClaimTransactionController | None = None
        self._reconciliation: Reconciliation | None = None
        self._view: ClaimStatusView | None = None
        self._tasks: list[asyncio.Task] = []
        self._closed = False

    @property
    def view(self) -> ClaimStatusView:
        return self._view if self._view is not None else self.evaluate()

    @property
    def reconciliation(self) -> Reconciliation | None:
        return self._reconciliation

    @property
    def controller(self) -> ClaimTransactionController | None:
        return self._controller

    # ── Enable conditions ──────────────────────────────────

    def free_info_enabled(self) -> bool:
        return resolve_is_free_market(self._market_type, self._indexed) is True

    def claim_status_enabled(self) -> bool:
        return self._wallet.current_address() is not None

    # ── Fetches ────────────────────────────────────────────

    async def refresh_index(self) -> None:
        market = await self._index.get_market(self.market_id)
        if market is not None:
            self._indexed = market
        self.evaluate()
        # Market just became known as free-entry: don't wait a full interval.
        if self.free_info_enabled() and self._free_info is None:
            await self.refresh_free_info()

    async def refresh_free_info(self) -> None:
        info = await self._queries.get_free_market_info(self.market_id)
        if info is not None:
            self._free_info = info
        self.evaluate()

    async def refresh_claim_status(self) -> None:
        address = self._wallet.current_address()
        if address is None:
            self.evaluate()
            return
        record = await self._queries.get_claim_status(self.market_id, address)
        if record is not None:
            self._claim_record = record
        self.evaluate()

    async def refresh(self) -> ClaimStatusView:
        """Fetch every enabled source once and return the resulting view."""
        await self.refresh_index()
        if self.free_info_enabled():
            await self.refresh_free_info()
        if self.claim_status_enabled():
            await self.refresh_claim_status()
        return self.view

    # ── Evaluation ─────────────────────────────────────────

    def snapshot(self) -> SourceSnapshot:
        return SourceSnapshot(
            market_id=self.market_id,
            wallet_address=self._wallet.current_address(),
            market_type=self._market_type,
            indexed=self._indexed,
            free_info=self._free_info,
            claim_record=self._claim_record,
        )

    def evaluate(self) -> ClaimStatusView:
        """Recompute the view from the latest snapshot of all inputs."""
        snapshot = self.snapshot()
        result = reconcile(snapshot, log=self._core_log)
        self._reconciliation = result

        tx_state = ClaimTransactionState()
        controller = self._sync_controller(snapshot.wallet_address)
        if controller is not None:
            controller.observe(result.tokens_per_participant)
            tx_state = controller.state

        view = project(result.eligibility, tx_state)
        if view != self._view:
            self._view = view
            if self._on_update is not None and not self._closed:
                self._on_update(view)
        return view

    def _sync_controller(self, wallet_address: str | None) -> ClaimTransactionController | None:
        controller = self._controller
        if controller is not None and controller.owns(self.market_id, wallet_address):
            return controller
        if controller is not None:
            log.info("Wallet changed, discarding claim state for %s", controller.wallet_address)
            controller.close()
            self._controller = None
        if wallet_address is None or self._closed:
            return None
        self._controller = ClaimTransactionController(
            market_id=self.market_id,
            wallet_address=wallet_address,
            contract_address=self._queries.contract_address,
            writer=self._writer,
            watcher=self._watcher,
            sink=self._sink,
            on_transition=self._on_transition,
            log=self._core_log,
        )
        return self._controller

    def _on_transition(self, state: ClaimTransactionState) -> None:
        log.debug("Claim on market %d is %s", self.market_id, state.phase.value)
        self.evaluate()

    # ── Actions ────────────────────────────────────────────

    async def claim(self) -> ClaimTransactionState | None:
        """Submit a claim if the view currently offers one.

        Returns None when no wallet is connected.
        """
        view = self.evaluate()
        controller = self._controller
        if controller is None:
            log.warning("Claim requested for market %d without a wallet", self.market_id)
            return None
        if not view.action_enabled:
            log.warning(
                "Claim requested for market %d while unavailable (%s)",
                self.market_id, view.badge_variant.value,
            )
            return controller.state

        tokens = self._reconciliation.tokens_per_participant if self._reconciliation else 0
        state = await controller.submit(tokens)

        if not self._closed:
            await self.refresh_claim_status()
            await self.refresh_free_info()
        return state

    # ── Lifecycle ──────────────────────────────────────────

    async def run(self) -> None:
        """Run the polling loops until ``close()`` or cancellation."""
        log.info("Monitoring free market %d (poll every %ss)", self.market_id, self._poll_interval)
        self._tasks = [
            asyncio.create_task(self._poll_loop("index", lambda: True, self.refresh_index)),
            asyncio.create_task(
                self._poll_loop("free_info", self.free_info_enabled, self.refresh_free_info)
            ),
            asyncio.create_task(
                self._poll_loop("claim_status", self.claim_status_enabled, self.refresh_claim_status)
            ),
        ]
        try:
            await asyncio.gather(*self._tasks)
        except asyncio.CancelledError:
            log.info("Monitor for market %d cancelled", self.market_id)
        finally:
            await self.close()

    async def close(self) -> None:
        """Stop polling and discard any pending claim notification."""
        if self._closed:
            return
        self._closed = True
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        if self._controller is not None:
            self._controller.close()
        log.info("Monitor for market %d closed", self.market_id)

    async def _poll_loop(
        self,
        name: str,
        enabled: Callable[[], bool],
        refresh: Callable[[], Awaitable[None]],
    ) -> None:
        while not self._closed:
            if enabled():
                try:
                    await refresh()
                except Exception as exc:
                    log.error("%s refresh failed: %s", name, exc, exc_info=True)
            await asyncio.sleep(self._poll_interval)

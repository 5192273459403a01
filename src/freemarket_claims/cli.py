"""CLI entry point for freemarket_claims."""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

import click
from aiohttp import web

from freemarket_claims.chain.queries import FreeMarketQueries
from freemarket_claims.chain.web3_client import Web3ContractClient
from freemarket_claims.claims.monitor import FreeMarketClaimMonitor
from freemarket_claims.config import load_config
from freemarket_claims.debuglog import core_logger
from freemarket_claims.index.subgraph import SubgraphMarketIndex
from freemarket_claims.models.config import ClaimsConfig
from freemarket_claims.models.records import Notification, NotificationKind
from freemarket_claims.models.view import ClaimStatusView
from freemarket_claims.storage.sqlite import SQLiteNotificationStore
from freemarket_claims.webhook.events import HubAppKeyVerifier
from freemarket_claims.webhook.server import create_app

log = logging.getLogger(__name__)


class _StaticWallet:
    """Wallet context for a fixed address given on the command line."""

    def __init__(self, address: str | None) -> None:
        self._address = address

    def current_address(self) -> str | None:
        return self._address


class _EchoSink:
    """Prints notifications to the terminal."""

    def notify(self, notification: Notification) -> None:
        color = "green" if notification.kind == NotificationKind.SUCCESS else "red"
        click.secho(notification.title, fg=color, bold=True)
        click.echo(f"  {notification.description}")


def _require_contract(cfg: ClaimsConfig) -> None:
    """Exit with error if no contract address is configured."""
    if not cfg.chain.contract_address:
        click.echo("Error: No contract address configured.", err=True)
        click.echo(
            "Set FREEMARKET_CLAIMS_CONTRACT_ADDRESS or check deployments.json.", err=True,
        )
        sys.exit(1)


def _print_view(view: ClaimStatusView) -> None:
    if not view.visible:
        click.echo("Not a free-entry market.")
        return
    line = f"[{view.badge_variant.value}] {view.badge_label}"
    if view.action_visible:
        line += f"  <{view.action_label}{'' if view.action_enabled else ' (disabled)'}>"
    click.echo(line)
    if view.slots_label:
        click.echo(f"  Slots remaining: {view.slots_label}")


def _build_monitor(
    cfg: ClaimsConfig,
    market_id: int,
    address: str | None,
    market_type: int | None,
    on_update=None,
) -> tuple[FreeMarketClaimMonitor, Web3ContractClient]:
    client = Web3ContractClient(
        cfg.chain.rpc_url,
        sender=address,
        confirmation_poll=cfg.chain.confirmation_poll,
    )
    monitor = FreeMarketClaimMonitor(
        market_id=market_id,
        queries=FreeMarketQueries(client, cfg.chain.contract_address),
        index=SubgraphMarketIndex(cfg.index.subgraph_url, cfg.index.request_timeout),
        wallet=_StaticWallet(address),
        writer=client,
        watcher=client,
        sink=_EchoSink(),
        market_type=market_type,
        poll_interval=cfg.poll_interval,
        on_update=on_update,
        core_log=core_logger(cfg.debug),
    )
    return monitor, client


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """freemarket-claims - free-entry market claim status and claims."""
    cfg = load_config(config_path)
    ctx.ensure_object(dict)
    ctx.obj["cfg"] = cfg

    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show effective configuration."""
    cfg: ClaimsConfig = ctx.obj["cfg"]
    click.echo(f"Network:       {cfg.chain.network} (chain {cfg.chain.chain_id})")
    click.echo(f"RPC URL:       {cfg.chain.rpc_url}")
    click.echo(f"Contract:      {cfg.chain.contract_address or '(not set)'}")
    click.echo(f"Subgraph:      {cfg.index.subgraph_url or '(not set)'}")
    click.echo(f"Poll interval: {cfg.poll_interval}s")
    click.echo(f"Log level:     {cfg.log_level}")
    click.echo(f"Debug:         {cfg.debug}")
    click.echo(f"Webhook:       {cfg.webhook.host}:{cfg.webhook.port}{cfg.webhook.path}")
    click.echo(f"DB path:       {cfg.webhook.db_path}")
    click.echo(
        f"Neynar key:    {'***configured***' if cfg.webhook.neynar_api_key else '(not set)'}"
    )


@cli.command()
@click.argument("market_id", type=int)
@click.option("--address", default=None, help="Wallet address to check")
@click.option("--market-type", type=int, default=None, help="Contract market type, if known (1 = free)")
@click.pass_context
def status(ctx: click.Context, market_id: int, address: str | None, market_type: int | None) -> None:
    """Show the claim status of a market once."""
    cfg: ClaimsConfig = ctx.obj["cfg"]
    _require_contract(cfg)

    async def _status():
        monitor, client = _build_monitor(cfg, market_id, address, market_type)
        try:
            view = await monitor.refresh()
            _print_view(view)
        finally:
            await monitor.close()
            await client.close()

    asyncio.run(_status())


@cli.command()
@click.argument("market_id", type=int)
@click.option("--address", default=None, help="Wallet address to watch")
@click.option("--market-type", type=int, default=None, help="Contract market type, if known (1 = free)")
@click.pass_context
def watch(ctx: click.Context, market_id: int, address: str | None, market_type: int | None) -> None:
    """Poll a market and print every status change."""
    cfg: ClaimsConfig = ctx.obj["cfg"]
    _require_contract(cfg)

    async def _watch():
        monitor, client = _build_monitor(cfg, market_id, address, market_type, on_update=_print_view)
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, lambda: asyncio.ensure_future(monitor.close()))
            except NotImplementedError:
                # Windows doesn't support add_signal_handler
                pass
        try:
            await monitor.run()
        finally:
            await client.close()

    asyncio.run(_watch())


# ── Claim ──────────────────────────────────────────────


@cli.command()
@click.argument("market_id", type=int)
@click.option("--address", required=True, help="Wallet address to claim for (signed by the RPC node)")
@click.option("--market-type", type=int, default=None, help="Contract market type, if known (1 = free)")
@click.pass_context
def claim(ctx: click.Context, market_id: int, address: str, market_type: int | None) -> None:
    """Claim free tokens on a free-entry market."""
    cfg: ClaimsConfig = ctx.obj["cfg"]
    _require_contract(cfg)

    async def _claim():
        monitor, client = _build_monitor(cfg, market_id, address, market_type)
        try:
            view = await monitor.refresh()
            _print_view(view)
            if not view.action_enabled:
                click.echo("Nothing to claim.", err=True)
                sys.exit(1)

            state = await monitor.claim()
            if state is not None and state.tx_hash:
                click.echo(f"Transaction: {state.tx_hash}")
            _print_view(monitor.view)
            if state is None or state.reason:
                sys.exit(1)
        finally:
            await monitor.close()
            await client.close()

    asyncio.run(_claim())


# ── Webhook relay ──────────────────────────────────────


@cli.command()
@click.option("--host", default=None, help="Bind address")
@click.option("--port", type=int, default=None, help="Bind port")
@click.pass_context
def webhook(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Serve the notification webhook relay."""
    cfg: ClaimsConfig = ctx.obj["cfg"]
    if not cfg.webhook.neynar_api_key:
        log.warning("No Neynar API key configured; hub lookups may be rate limited")

    bind_host = host or cfg.webhook.host
    bind_port = port or cfg.webhook.port

    async def _webhook():
        async with SQLiteNotificationStore(cfg.webhook.db_path) as store:
            app = create_app(
                store,
                HubAppKeyVerifier(cfg.webhook.hub_url, cfg.webhook.neynar_api_key),
                path=cfg.webhook.path,
            )
            runner = web.AppRunner(app)
            await runner.setup()
            try:
                await web.TCPSite(runner, bind_host, bind_port).start()
                click.echo(f"Webhook relay listening on http://{bind_host}:{bind_port}{cfg.webhook.path}")
                await asyncio.Event().wait()
            finally:
                await runner.cleanup()

    try:
        asyncio.run(_webhook())
    except KeyboardInterrupt:
        click.echo("Webhook relay stopped")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

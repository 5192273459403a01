"""Configuration loading: TOML file + environment variables + deployments.json."""

from __future__ import annotations

import json
import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from freemarket_claims.models.config import ClaimsConfig

_TRUE = ("1", "true", "yes", "on")


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "FREEMARKET_CLAIMS_",
) -> ClaimsConfig:
    """Load configuration from TOML file, env vars, and deployments.json.

    Priority (highest wins):
        1. Environment variables (FREEMARKET_CLAIMS_RPC_URL, etc.)
        2. TOML config file
        3. Defaults from ClaimsConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = ClaimsConfig()

    # ── Monitor section ────────────────────────────────────
    monitor = raw.get("monitor", {})
    if v := monitor.get("poll_interval"):
        cfg.poll_interval = int(v)
    if v := monitor.get("log_level"):
        cfg.log_level = str(v)
    if "debug" in monitor:
        cfg.debug = _as_bool(monitor["debug"])

    # ── Chain section ──────────────────────────────────────
    chain = raw.get("chain", {})
    if v := chain.get("network"):
        cfg.chain.network = str(v)
    if v := chain.get("chain_id"):
        cfg.chain.chain_id = int(v)
    if v := chain.get("rpc_url"):
        cfg.chain.rpc_url = str(v)
    if v := chain.get("contract_address"):
        cfg.chain.contract_address = str(v)
    if v := chain.get("confirmation_poll"):
        cfg.chain.confirmation_poll = float(v)
    if v := chain.get("deployments_path"):
        cfg.chain.deployments_path = str(v)

    # ── Index section ──────────────────────────────────────
    index = raw.get("index", {})
    if v := index.get("subgraph_url"):
        cfg.index.subgraph_url = str(v)
    if v := index.get("request_timeout"):
        cfg.index.request_timeout = int(v)

    # ── Webhook section ────────────────────────────────────
    webhook = raw.get("webhook", {})
    if v := webhook.get("host"):
        cfg.webhook.host = str(v)
    if v := webhook.get("port"):
        cfg.webhook.port = int(v)
    if v := webhook.get("path"):
        cfg.webhook.path = str(v)
    if v := webhook.get("db_path"):
        cfg.webhook.db_path = str(v)
    if v := webhook.get("hub_url"):
        cfg.webhook.hub_url = str(v)
    if v := webhook.get("neynar_api_key"):
        cfg.webhook.neynar_api_key = str(v)

    # ── Environment variable overrides (highest priority) ──
    if rpc := os.environ.get(f"{env_prefix}RPC_URL"):
        cfg.chain.rpc_url = rpc
    if addr := os.environ.get(f"{env_prefix}CONTRACT_ADDRESS"):
        cfg.chain.contract_address = addr
    if url := os.environ.get(f"{env_prefix}SUBGRAPH_URL"):
        cfg.index.subgraph_url = url
    if key := os.environ.get(f"{env_prefix}NEYNAR_API_KEY"):
        cfg.webhook.neynar_api_key = key
    if interval := os.environ.get(f"{env_prefix}POLL_INTERVAL"):
        cfg.poll_interval = int(interval)
    if debug := os.environ.get(f"{env_prefix}DEBUG"):
        cfg.debug = _as_bool(debug)

    # Fall back to deployments.json for the contract address
    if not cfg.chain.contract_address:
        _load_deployments(cfg, cfg.chain.deployments_path)

    # Expand ~ in paths
    cfg.webhook.db_path = str(Path(cfg.webhook.db_path).expanduser())

    return cfg


def _load_deployments(cfg: ClaimsConfig, deployments_path: str) -> None:
    """Load the market contract address for the configured network."""
    p = Path(deployments_path).expanduser()
    if not p.is_absolute():
        # Try relative to CWD
        p = Path.cwd() / p
    if not p.exists():
        return

    with open(p) as f:
        data = json.load(f)

    network = data.get(cfg.chain.network, {})
    market = network.get("prediction_market_v2", {})
    if addr := market.get("address"):
        cfg.chain.contract_address = addr

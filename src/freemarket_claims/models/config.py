"""Configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ChainConfig:
    """EVM endpoint and prediction market contract."""

    network: str = "base"
    chain_id: int = 8453
    rpc_url: str = "https://mainnet.base.org"
    contract_address: str = ""  # prediction market V2 contract
    confirmation_poll: float = 2.0  # seconds between receipt lookups
    deployments_path: str = "deployments.json"


@dataclass
class IndexConfig:
    """Secondary index (subgraph) endpoint."""

    subgraph_url: str = ""
    request_timeout: int = 10  # seconds


@dataclass
class WebhookConfig:
    """Push-notification webhook relay."""

    host: str = "127.0.0.1"
    port: int = 8080
    path: str = "/api/webhook"
    db_path: str = "~/.freemarket_claims/notifications.db"
    hub_url: str = "https://hub-api.neynar.com"
    neynar_api_key: str = ""  # loaded from env var FREEMARKET_CLAIMS_NEYNAR_API_KEY


@dataclass
class ClaimsConfig:
    """Complete configuration."""

    # Monitor
    poll_interval: int = 10  # seconds
    log_level: str = "info"
    debug: bool = False  # route core decision logging to the console

    chain: ChainConfig = field(default_factory=ChainConfig)
    index: IndexConfig = field(default_factory=IndexConfig)
    webhook: WebhookConfig = field(default_factory=WebhookConfig)

"""Shared fixtures for freemarket_claims tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from freemarket_claims.chain.queries import FreeMarketQueries
from freemarket_claims.claims.monitor import FreeMarketClaimMonitor
from freemarket_claims.models.config import ChainConfig, ClaimsConfig, IndexConfig, WebhookConfig
from freemarket_claims.storage.sqlite import SQLiteNotificationStore

from tests.factories import WALLET, free_info_tuple
from tests.mocks import MockIndex, MockReader, MockSink, MockWallet, MockWatcher, MockWriter

CONTRACT_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
MARKET_ID = 7

EXPLORER_BASE = "https://basescan.org"


def basescan_link(kind: str, id: str, label: str | None = None) -> str:
    """Build an HTML anchor to basescan for the report."""
    url = f"{EXPLORER_BASE}/{kind}/{id}"
    text = label or f"{id[:8]}...{id[-4:]}"
    return f'<a href="{url}" target="_blank">{text}</a>'


# ── Report metadata & explorer links ─────────────────────────────


def pytest_configure(config):
    """Add network info to the HTML report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Network"] = "Base (chain 8453)"
    meta["Prediction Market Contract"] = CONTRACT_ADDRESS
    meta["Test Wallet"] = WALLET


def pytest_html_results_summary(prefix, summary, postfix):
    """Inject clickable basescan links into the report summary."""
    prefix.append(
        '<div style="margin:8px 0;padding:10px;background:#f8f9fa;border:1px solid #dee2e6;'
        'border-radius:4px;font-family:monospace;font-size:13px;">'
        "<strong>Base Explorer Links</strong><br/>"
        f'Prediction Market: {basescan_link("address", CONTRACT_ADDRESS, CONTRACT_ADDRESS)}<br/>'
        f'Test Wallet: {basescan_link("address", WALLET, WALLET)}'
        "</div>"
    )


def make_test_config(**overrides) -> ClaimsConfig:
    """Build a ClaimsConfig suitable for testing."""
    defaults = dict(
        poll_interval=1,
        debug=True,
        chain=ChainConfig(contract_address=CONTRACT_ADDRESS, confirmation_poll=0.01),
        index=IndexConfig(subgraph_url="http://subgraph.test/graphql", request_timeout=1),
        webhook=WebhookConfig(db_path=":memory:"),
    )
    defaults.update(overrides)
    return ClaimsConfig(**defaults)


@pytest.fixture
def test_config():
    """Default ClaimsConfig for tests."""
    return make_test_config()


@pytest.fixture
async def store():
    """Initialized in-memory SQLiteNotificationStore."""
    s = SQLiteNotificationStore(":memory:")
    await s.initialize()
    yield s
    await s.close()


@pytest.fixture
def mock_wallet():
    return MockWallet(WALLET)


@pytest.fixture
def mock_reader():
    return MockReader({
        "getFreeMarketInfo": free_info_tuple(),
        "hasUserClaimedFreeTokens": (False, 0),
    })


@pytest.fixture
def mock_writer():
    return MockWriter(succeed=True)


@pytest.fixture
def mock_watcher():
    return MockWatcher()


@pytest.fixture
def mock_index():
    return MockIndex()


@pytest.fixture
def mock_sink():
    return MockSink()


@pytest.fixture
def queries(mock_reader):
    return FreeMarketQueries(mock_reader, CONTRACT_ADDRESS)


@pytest.fixture
async def monitor(queries, mock_index, mock_wallet, mock_writer, mock_watcher, mock_sink):
    """Monitor for a caller-declared free market with mocked components."""
    m = FreeMarketClaimMonitor(
        market_id=MARKET_ID,
        queries=queries,
        index=mock_index,
        wallet=mock_wallet,
        writer=mock_writer,
        watcher=mock_watcher,
        sink=mock_sink,
        market_type=1,
        poll_interval=0.01,
    )
    yield m
    await m.close()

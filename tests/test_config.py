"""Configuration loading: defaults, TOML, env overrides, deployments.json."""

from __future__ import annotations

import json

import pytest

from freemarket_claims.config import load_config

from tests.conftest import CONTRACT_ADDRESS

ENV_VARS = (
    "RPC_URL", "CONTRACT_ADDRESS", "SUBGRAPH_URL", "NEYNAR_API_KEY", "POLL_INTERVAL", "DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(f"FREEMARKET_CLAIMS_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    cfg = load_config()
    assert cfg.chain.network == "base"
    assert cfg.chain.chain_id == 8453
    assert cfg.chain.rpc_url == "https://mainnet.base.org"
    assert cfg.chain.contract_address == ""
    assert cfg.poll_interval == 10
    assert cfg.debug is False
    assert not cfg.webhook.db_path.startswith("~")


def test_toml_file(tmp_path):
    path = tmp_path / "claims.toml"
    path.write_text(
        '[monitor]\npoll_interval = 3\ndebug = true\n'
        '[chain]\nrpc_url = "http://127.0.0.1:8545"\ncontract_address = "0xabc"\n'
        '[index]\nsubgraph_url = "http://subgraph.test"\n'
        '[webhook]\nport = 9090\npath = "/hook"\n'
    )

    cfg = load_config(path)

    assert cfg.poll_interval == 3
    assert cfg.debug is True
    assert cfg.chain.rpc_url == "http://127.0.0.1:8545"
    assert cfg.chain.contract_address == "0xabc"
    assert cfg.index.subgraph_url == "http://subgraph.test"
    assert cfg.webhook.port == 9090
    assert cfg.webhook.path == "/hook"


def test_env_overrides_toml(tmp_path, monkeypatch):
    path = tmp_path / "claims.toml"
    path.write_text('[chain]\nrpc_url = "http://from-file"\n')
    monkeypatch.setenv("FREEMARKET_CLAIMS_RPC_URL", "http://from-env")
    monkeypatch.setenv("FREEMARKET_CLAIMS_POLL_INTERVAL", "30")
    monkeypatch.setenv("FREEMARKET_CLAIMS_DEBUG", "yes")
    monkeypatch.setenv("FREEMARKET_CLAIMS_NEYNAR_API_KEY", "secret")

    cfg = load_config(path)

    assert cfg.chain.rpc_url == "http://from-env"
    assert cfg.poll_interval == 30
    assert cfg.debug is True
    assert cfg.webhook.neynar_api_key == "secret"


def test_missing_file_uses_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.toml")
    assert cfg.chain.rpc_url == "https://mainnet.base.org"


def test_contract_from_deployments(tmp_path):
    (tmp_path / "deployments.json").write_text(json.dumps({
        "base": {"prediction_market_v2": {"address": CONTRACT_ADDRESS}},
    }))
    assert load_config().chain.contract_address == CONTRACT_ADDRESS


def test_explicit_contract_beats_deployments(tmp_path, monkeypatch):
    (tmp_path / "deployments.json").write_text(json.dumps({
        "base": {"prediction_market_v2": {"address": CONTRACT_ADDRESS}},
    }))
    monkeypatch.setenv("FREEMARKET_CLAIMS_CONTRACT_ADDRESS", "0xfromenv")
    assert load_config().chain.contract_address == "0xfromenv"

"""Contract queries and the web3 client's receipt handling."""

from __future__ import annotations

import logging

import pytest
from web3.exceptions import TransactionNotFound

from freemarket_claims.chain.queries import FreeMarketQueries
from freemarket_claims.chain.web3_client import Web3ContractClient, _checksum_args
from freemarket_claims.errors import ConfirmationFailed, SubmissionRejected
from freemarket_claims.models.records import TxStatus

from tests.conftest import CONTRACT_ADDRESS, MARKET_ID
from tests.factories import ONE_TOKEN, WALLET, free_info_tuple
from tests.mocks import MockReader


# ── FreeMarketQueries ─────────────────────────────────────────────


async def test_get_free_market_info():
    reader = MockReader({"getFreeMarketInfo": free_info_tuple(current_participants=60)})
    queries = FreeMarketQueries(reader, CONTRACT_ADDRESS)

    info = await queries.get_free_market_info(MARKET_ID)

    assert info.max_participants == 100
    assert info.current_participants == 60
    assert info.tokens_per_participant == 5 * ONE_TOKEN
    assert info.is_active is True
    assert reader.read_calls == [(CONTRACT_ADDRESS, "getFreeMarketInfo", (MARKET_ID,))]


async def test_get_claim_status():
    reader = MockReader({"hasUserClaimedFreeTokens": (True, 5 * ONE_TOKEN)})
    queries = FreeMarketQueries(reader, CONTRACT_ADDRESS)

    record = await queries.get_claim_status(MARKET_ID, WALLET)

    assert record.wallet_address == WALLET
    assert record.has_claimed is True
    assert record.tokens_received == 5 * ONE_TOKEN
    assert reader.read_calls[0][2] == (MARKET_ID, WALLET)


async def test_query_failures_return_none(caplog):
    reader = MockReader()
    reader.failing.update({"getFreeMarketInfo", "hasUserClaimedFreeTokens"})
    queries = FreeMarketQueries(reader, CONTRACT_ADDRESS)

    assert await queries.get_free_market_info(MARKET_ID) is None
    assert await queries.get_claim_status(MARKET_ID, WALLET) is None
    assert "getFreeMarketInfo(7) failed" in caplog.text


async def test_short_tuple_returns_none():
    reader = MockReader({"getFreeMarketInfo": (100, ONE_TOKEN)})
    queries = FreeMarketQueries(reader, CONTRACT_ADDRESS)
    assert await queries.get_free_market_info(MARKET_ID) is None


async def test_missing_result_returns_none():
    queries = FreeMarketQueries(MockReader(), CONTRACT_ADDRESS)
    assert await queries.get_free_market_info(MARKET_ID) is None
    assert await queries.get_claim_status(MARKET_ID, WALLET) is None


# ── Web3ContractClient ────────────────────────────────────────────


class _FakeEth:
    def __init__(self, receipts):
        self._receipts = list(receipts)
        self.calls = 0

    async def get_transaction_receipt(self, tx_hash):
        self.calls += 1
        item = self._receipts.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class _FakeWeb3:
    def __init__(self, receipts):
        self.eth = _FakeEth(receipts)


def _client(receipts, sender=None):
    return Web3ContractClient(
        "http://127.0.0.1:8545", sender=sender, confirmation_poll=0, w3=_FakeWeb3(receipts),
    )


async def test_confirmation_waits_for_receipt():
    client = _client([
        TransactionNotFound("pending"),
        TransactionNotFound("pending"),
        {"status": 1, "blockNumber": 42},
    ])

    receipt = await client.await_confirmation("0xabc")

    assert receipt.status == TxStatus.SUCCESS
    assert receipt.block_number == 42
    assert client._w3.eth.calls == 3


async def test_reverted_receipt():
    receipt = await _client([{"status": 0, "blockNumber": 7}]).await_confirmation("0xabc")
    assert receipt.status == TxStatus.FAILURE


async def test_receipt_error_raises_confirmation_failed():
    with pytest.raises(ConfirmationFailed) as exc_info:
        await _client([RuntimeError("connection reset")]).await_confirmation("0xabc")
    assert exc_info.value.tx_hash == "0xabc"


async def test_write_without_sender_is_rejected():
    with pytest.raises(SubmissionRejected):
        await _client([]).write(CONTRACT_ADDRESS, "claimFreeTokens", [MARKET_ID])


def test_address_args_are_checksummed():
    args = _checksum_args([MARKET_ID, CONTRACT_ADDRESS.lower()])
    assert args == [MARKET_ID, CONTRACT_ADDRESS]


class _BrokenProvider:
    async def disconnect(self):
        raise RuntimeError("session already closed")


async def test_close_logs_provider_failure(caplog):
    w3 = _FakeWeb3([])
    w3.provider = _BrokenProvider()
    client = Web3ContractClient("http://127.0.0.1:8545", w3=w3)

    with caplog.at_level(logging.DEBUG, logger="freemarket_claims.chain.web3_client"):
        await client.close()

    assert "Provider disconnect failed" in caplog.text
    assert "session already closed" in caplog.text

"""web3.py binding of the chain reader, writer and confirmation watcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from web3 import AsyncWeb3
from web3.exceptions import TransactionNotFound

from freemarket_claims.errors import ConfirmationFailed, SubmissionRejected, TransportError
from freemarket_claims.models.records import TxReceipt, TxStatus

log = logging.getLogger(__name__)

# Only the functions we need from the prediction market V2 ABI.
FREE_MARKET_ABI = [
    {
        "name": "getFreeMarketInfo", "type": "function", "stateMutability": "view",
        "inputs": [{"name": "_marketId", "type": "uint256"}],
        "outputs": [
            {"name": "maxFreeParticipants", "type": "uint256"},
            {"name": "tokensPerParticipant", "type": "uint256"},
            {"name": "currentFreeParticipants", "type": "uint256"},
            {"name": "totalPrizePool", "type": "uint256"},
            {"name": "remainingPrizePool", "type": "uint256"},
            {"name": "isActive", "type": "bool"},
        ],
    },
    {
        "name": "hasUserClaimedFreeTokens", "type": "function", "stateMutability": "view",
        "inputs": [
            {"name": "_marketId", "type": "uint256"},
            {"name": "_user", "type": "address"},
        ],
        "outputs": [
            {"name": "", "type": "bool"},
            {"name": "", "type": "uint256"},
        ],
    },
    {
        "name": "claimFreeTokens", "type": "function", "stateMutability": "nonpayable",
        "inputs": [{"name": "_marketId", "type": "uint256"}],
        "outputs": [],
    },
]


def build_web3(rpc_url: str) -> AsyncWeb3:
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))


def _checksum_args(args: Sequence[Any]) -> list[Any]:
    return [
        AsyncWeb3.to_checksum_address(a) if isinstance(a, str) and AsyncWeb3.is_address(a) else a
        for a in args
    ]


class Web3ContractClient:
    """Reads, writes and receipt polling over an EVM JSON-RPC endpoint.

    Writes are sent with ``eth_sendTransaction`` from ``sender``; signing is
    left to the wallet or node behind the endpoint.
    """

    def __init__(
        self,
        rpc_url: str,
        sender: str | None = None,
        abi: list[dict] | None = None,
        confirmation_poll: float = 2.0,
        w3: AsyncWeb3 | None = None,
    ) -> None:
        self._w3 = w3 or build_web3(rpc_url)
        self._sender = sender
        self._abi = abi or FREE_MARKET_ABI
        self._confirmation_poll = confirmation_poll

    def _function(self, contract_address: str, function_name: str, args: Sequence[Any]):
        contract = self._w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(contract_address), abi=self._abi,
        )
        return getattr(contract.functions, function_name)(*_checksum_args(args))

    async def read(self, contract_address: str, function_name: str, args: Sequence[Any]) -> Any:
        try:
            return await self._function(contract_address, function_name, args).call()
        except Exception as exc:
            raise TransportError(f"{function_name} call failed: {exc}") from exc

    async def write(self, contract_address: str, function_name: str, args: Sequence[Any]) -> str:
        if not self._sender:
            raise SubmissionRejected("No wallet connected")
        log.info("Sending %s%s from %s", function_name, tuple(args), self._sender)
        try:
            tx_hash = await self._function(contract_address, function_name, args).transact(
                {"from": AsyncWeb3.to_checksum_address(self._sender)},
            )
        except Exception as exc:
            raise SubmissionRejected(str(exc)) from exc
        return AsyncWeb3.to_hex(tx_hash)

    async def await_confirmation(self, tx_hash: str) -> TxReceipt:
        """Poll for the receipt until it appears. No timeout; cancel to stop."""
        while True:
            try:
                receipt = await self._w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                await asyncio.sleep(self._confirmation_poll)
                continue
            except Exception as exc:
                raise ConfirmationFailed(str(exc), tx_hash=tx_hash) from exc

            status = TxStatus.SUCCESS if receipt["status"] == 1 else TxStatus.FAILURE
            log.info(
                "Receipt for %s: %s (block %s)", tx_hash[:18], status.value, receipt["blockNumber"],
            )
            return TxReceipt(
                tx_hash=tx_hash, status=status, block_number=receipt["blockNumber"],
            )

    async def close(self) -> None:
        """Close the provider's HTTP session."""
        try:
            await self._w3.provider.disconnect()
        except Exception:
            log.debug("Provider disconnect failed", exc_info=True)

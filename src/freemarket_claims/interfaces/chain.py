"""Chain client protocols - contract reads, writes and receipt watching."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from freemarket_claims.models.records import TxReceipt


class ChainReader(Protocol):
    """Read-only contract calls."""

    async def read(self, contract_address: str, function_name: str, args: Sequence[Any]) -> Any:
        """Call a view function and return its decoded result."""
        ...


class ChainWriter(Protocol):
    """State-changing contract calls, signed by the connected wallet."""

    async def write(self, contract_address: str, function_name: str, args: Sequence[Any]) -> str:
        """Submit a transaction and return its hash.

        Raises when the wallet rejects the request.
        """
        ...


class ConfirmationWatcher(Protocol):
    """Waits for a submitted transaction to reach finality."""

    async def await_confirmation(self, tx_hash: str) -> TxReceipt:
        """Block until the receipt is available."""
        ...

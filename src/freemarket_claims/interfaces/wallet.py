"""WalletContext protocol - exposes the currently connected account."""

from __future__ import annotations

from typing import Protocol


class WalletContext(Protocol):
    """Connected wallet, reactive to connect/disconnect."""

    def current_address(self) -> str | None:
        """Return the connected address, or None when disconnected."""
        ...

"""Protocol interfaces for all freemarket_claims collaborators."""

from freemarket_claims.interfaces.wallet import WalletContext
from freemarket_claims.interfaces.chain import ChainReader, ChainWriter, ConfirmationWatcher
from freemarket_claims.interfaces.index import MarketIndex
from freemarket_claims.interfaces.notify import NotificationSink
from freemarket_claims.interfaces.store import NotificationStore

__all__ = [
    "WalletContext",
    "ChainReader", "ChainWriter", "ConfirmationWatcher",
    "MarketIndex",
    "NotificationSink",
    "NotificationStore",
]

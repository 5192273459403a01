"""EVM contract integration."""

from freemarket_claims.chain.queries import FreeMarketQueries
from freemarket_claims.chain.web3_client import FREE_MARKET_ABI, Web3ContractClient

__all__ = ["FreeMarketQueries", "Web3ContractClient", "FREE_MARKET_ABI"]

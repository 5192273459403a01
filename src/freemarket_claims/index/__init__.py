"""Secondary market index."""

from freemarket_claims.index.subgraph import SubgraphMarketIndex

__all__ = ["SubgraphMarketIndex"]

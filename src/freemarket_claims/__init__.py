"""freemarket_claims - free-entry market claim status and claim transactions."""

__version__ = "0.1.0"

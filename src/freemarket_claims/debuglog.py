"""Loggers injected into the pure reconciliation and claim core."""

from __future__ import annotations

import logging

_SILENT = logging.getLogger("freemarket_claims.silent")
_SILENT.addHandler(logging.NullHandler())
_SILENT.propagate = False
_SILENT.disabled = True


def silent_logger() -> logging.Logger:
    """Logger that discards everything. Default for the core."""
    return _SILENT


def core_logger(enabled: bool) -> logging.Logger:
    """Debug logger for the core, or the silent one when disabled."""
    if not enabled:
        return _SILENT
    log = logging.getLogger("freemarket_claims.core")
    log.setLevel(logging.DEBUG)
    return log

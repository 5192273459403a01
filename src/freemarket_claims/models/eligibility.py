"""Eligibility states for a wallet on a free-entry market.

Exactly one variant applies at a time. Each carries a ``kind`` tag so
callers can switch on it without isinstance chains.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class NotApplicable:
    """The market is not a free-entry market."""

    kind: ClassVar[str] = "not_applicable"


@dataclass(frozen=True)
class Unresolved:
    """Free-entry (or not yet known), but no usable config is available."""

    kind: ClassVar[str] = "unresolved"


@dataclass(frozen=True)
class Claimed:
    """The wallet has already claimed its allocation."""

    tokens_received: int

    kind: ClassVar[str] = "claimed"


@dataclass(frozen=True)
class Disconnected:
    """No wallet is connected."""

    kind: ClassVar[str] = "disconnected"


@dataclass(frozen=True)
class Available:
    """The wallet can claim now."""

    tokens_per_participant: int
    slots_remaining: int
    max_participants: int

    kind: ClassVar[str] = "available"


@dataclass(frozen=True)
class Exhausted:
    """Every free slot has been taken."""

    max_participants: int = 0

    kind: ClassVar[str] = "exhausted"


EligibilityState = Union[NotApplicable, Unresolved, Claimed, Disconnected, Available, Exhausted]

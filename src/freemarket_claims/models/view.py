"""Presentation view model for the claim status badge."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum


class BadgeVariant(str, Enum):
    NONE = "none"
    LOADING = "loading"
    CLAIMED = "claimed"  # green
    PROMPT = "prompt"  # purple, connect wallet
    AVAILABLE = "available"  # blue, with claim button
    EXHAUSTED = "exhausted"  # gray


@dataclass(frozen=True)
class ClaimStatusView:
    visible: bool
    badge_variant: BadgeVariant
    badge_label: str = ""
    action_visible: bool = False
    action_enabled: bool = False
    action_label: str = ""
    busy: bool = False
    slots_label: str | None = None  # "60/100"

    def to_dict(self) -> dict:
        d = asdict(self)
        d["badge_variant"] = self.badge_variant.value
        return d

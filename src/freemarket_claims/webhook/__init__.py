"""Farcaster mini-app webhook relay."""

from freemarket_claims.webhook.events import HubAppKeyVerifier, parse_webhook_event
from freemarket_claims.webhook.server import apply_event, create_app

__all__ = ["HubAppKeyVerifier", "parse_webhook_event", "apply_event", "create_app"]

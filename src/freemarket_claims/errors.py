"""Exception hierarchy for freemarket_claims."""

from __future__ import annotations


class ClaimsError(Exception):
    """Base class for all freemarket_claims errors."""


# ── Data sources ───────────────────────────────────────────
# Raised inside the bindings only. The query layers absorb them into
# ``None`` so they never reach the resolver.


class SourceUnavailable(ClaimsError):
    """A data source has no record (yet) for the requested market."""


class MalformedSource(SourceUnavailable):
    """A data source returned a record that cannot be parsed."""


class TransportError(SourceUnavailable):
    """A data source could not be reached."""


# ── Claim transaction ──────────────────────────────────────


class SubmissionRejected(ClaimsError):
    """The wallet or the node refused to submit the claim transaction."""


class ConfirmationFailed(ClaimsError):
    """The claim transaction reverted or its receipt could not be obtained."""

    def __init__(self, message: str, tx_hash: str | None = None) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


# ── Webhook relay ──────────────────────────────────────────


class WebhookError(ClaimsError):
    """Base class for rejected webhook deliveries."""


class InvalidEventData(WebhookError):
    """The webhook envelope or its payload could not be decoded."""


class InvalidSignature(WebhookError):
    """The envelope signature does not match the declared app key."""


class AppKeyRejected(WebhookError):
    """The hub does not list the app key as an active signer for the fid."""

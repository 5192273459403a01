"""Farcaster mini-app webhook events: JSON Farcaster Signature decoding.

A delivery is ``{"header": b64url, "payload": b64url, "signature": b64url}``.
The header names the user's fid and the Ed25519 app key that signed
``"<header>.<payload>"``; the payload carries the event itself.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Awaitable, Callable

import httpx
from stellar_sdk import Keypair
from stellar_sdk.exceptions import BadSignatureError

from freemarket_claims.errors import (
    AppKeyRejected,
    InvalidEventData,
    InvalidSignature,
    WebhookError,
)
from freemarket_claims.models.records import NotificationDetails, WebhookEvent

log = logging.getLogger(__name__)

FRAME_ADDED = "frame_added"
FRAME_REMOVED = "frame_removed"
NOTIFICATIONS_ENABLED = "notifications_enabled"
NOTIFICATIONS_DISABLED = "notifications_disabled"
KNOWN_EVENTS = {FRAME_ADDED, FRAME_REMOVED, NOTIFICATIONS_ENABLED, NOTIFICATIONS_DISABLED}

VerifyAppKey = Callable[[int, str], Awaitable[bool]]


def b64url_decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


def b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _decode_json(segment: Any, name: str) -> dict:
    if not isinstance(segment, str) or not segment:
        raise InvalidEventData(f"{name} missing")
    try:
        decoded = json.loads(b64url_decode(segment))
    except (ValueError, UnicodeDecodeError) as exc:
        raise InvalidEventData(f"{name} is not base64url JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise InvalidEventData(f"{name} is not an object")
    return decoded


def _app_key_bytes(key: Any) -> bytes:
    if not isinstance(key, str) or not key.startswith("0x"):
        raise InvalidEventData(f"app key is not 0x-prefixed hex: {key!r}")
    try:
        raw = bytes.fromhex(key[2:])
    except ValueError as exc:
        raise InvalidEventData(f"app key is not hex: {exc}") from exc
    if len(raw) != 32:
        raise InvalidEventData(f"app key has {len(raw)} bytes, expected 32")
    return raw


def verify_signature(header: str, payload: str, signature: str, app_key: bytes) -> None:
    """Raise InvalidSignature unless ``signature`` signs ``header.payload``."""
    signed = f"{header}.{payload}".encode("ascii")
    try:
        Keypair.from_raw_ed25519_public_key(app_key).verify(signed, b64url_decode(signature))
    except (BadSignatureError, ValueError) as exc:
        raise InvalidSignature("signature does not match app key") from exc


def _notification_details(event: dict) -> NotificationDetails | None:
    raw = event.get("notificationDetails")
    if not isinstance(raw, dict):
        return None
    url, token = raw.get("url"), raw.get("token")
    if not url or not token:
        return None
    return NotificationDetails(url=str(url), token=str(token))


async def parse_webhook_event(body: Any, verify_app_key: VerifyAppKey) -> WebhookEvent:
    """Decode, authenticate and return a webhook delivery."""
    if not isinstance(body, dict):
        raise InvalidEventData("body is not an object")

    header = _decode_json(body.get("header"), "header")
    event = _decode_json(body.get("payload"), "payload")
    signature = body.get("signature")
    if not isinstance(signature, str) or not signature:
        raise InvalidEventData("signature missing")

    fid = header.get("fid")
    if not isinstance(fid, int) or isinstance(fid, bool):
        raise InvalidEventData(f"fid is not an integer: {fid!r}")
    if header.get("type") != "app_key":
        raise InvalidEventData(f"unsupported signer type: {header.get('type')!r}")
    app_key = header.get("key")
    verify_signature(body["header"], body["payload"], signature, _app_key_bytes(app_key))

    if not await verify_app_key(fid, app_key):
        raise AppKeyRejected(f"app key is not an active signer for fid {fid}")

    name = event.get("event")
    if name not in KNOWN_EVENTS:
        raise InvalidEventData(f"unknown event: {name!r}")

    return WebhookEvent(
        fid=fid,
        event=name,
        app_key=app_key,
        notification_details=_notification_details(event),
    )


class HubAppKeyVerifier:
    """Checks app keys against a Farcaster hub's on-chain signer list.

    With a Neynar API key this talks to Neynar's hosted hub.
    """

    def __init__(
        self,
        hub_url: str,
        api_key: str = "",
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._hub_url = hub_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def __call__(self, fid: int, app_key: str) -> bool:
        headers = {"x-api-key": self._api_key} if self._api_key else {}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.get(
                    f"{self._hub_url}/v1/onChainSignersByFid",
                    params={"fid": fid},
                    headers=headers,
                )
                resp.raise_for_status()
                body = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise WebhookError(f"app key lookup failed for fid {fid}: {exc}") from exc

        wanted = app_key.lower()
        for signer in body.get("events", []):
            key = (signer.get("signerEventBody") or {}).get("key", "")
            if isinstance(key, str) and key.lower() == wanted:
                return True
        log.info("App key %s... not found for fid %d", app_key[:10], fid)
        return False

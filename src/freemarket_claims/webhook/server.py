"""Webhook relay - stores or drops push tokens on mini-app lifecycle events."""

from __future__ import annotations

import logging

from aiohttp import web

from freemarket_claims.interfaces.store import NotificationStore
from freemarket_claims.models.records import WebhookEvent
from freemarket_claims.webhook.events import (
    FRAME_ADDED,
    FRAME_REMOVED,
    NOTIFICATIONS_DISABLED,
    NOTIFICATIONS_ENABLED,
    VerifyAppKey,
    parse_webhook_event,
)

log = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", NotificationStore)
VERIFIER_KEY = web.AppKey("verify_app_key")


async def apply_event(store: NotificationStore, event: WebhookEvent) -> None:
    """Persist the effect of one verified event."""
    if event.event in (FRAME_ADDED, NOTIFICATIONS_ENABLED):
        if event.notification_details is not None:
            await store.set_notification_details(event.fid, event.notification_details)
            log.info("Stored notification details for fid %d (%s)", event.fid, event.event)
        else:
            log.info("%s for fid %d without notification details", event.event, event.fid)
    elif event.event in (FRAME_REMOVED, NOTIFICATIONS_DISABLED):
        await store.delete_notification_details(event.fid)
        log.info("Removed notification details for fid %d (%s)", event.fid, event.event)


async def handle_webhook(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    verify_app_key: VerifyAppKey = request.app[VERIFIER_KEY]
    try:
        body = await request.json()
        event = await parse_webhook_event(body, verify_app_key)
        await apply_event(store, event)
    except Exception as exc:
        log.error("Webhook error: %s", exc)
        return web.json_response({"error": "Failed to process webhook"}, status=500)
    return web.json_response({"status": "success"}, status=200)


def create_app(
    store: NotificationStore,
    verify_app_key: VerifyAppKey,
    path: str = "/api/webhook",
) -> web.Application:
    app = web.Application()
    app[STORE_KEY] = store
    app[VERIFIER_KEY] = verify_app_key
    app.router.add_post(path, handle_webhook)
    return app

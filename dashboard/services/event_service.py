# dashboard/services/event_service.py
import logging
from typing import Any

from fastapi import Depends
from sqlmodel import Session

from dashboard.core.config import Settings, get_settings
from dashboard.core.relay import EventRelay, get_relay
from dashboard.core.webhook_client import post_event
from dashboard.repositories.webhook_repo import WebhookRepository

logger = logging.getLogger(__name__)


class EventService:
    """
    Emits tagged events after successful writes.

    Order per event:
      1. append the audit row to `webhooks`
      2. dispatch: POST to WEBHOOK_URL when configured, otherwise publish
         to the in-process relay

    Neither step can fail the request that triggered it.
    """

    def __init__(
        self,
        repo: WebhookRepository,
        settings: Settings,
        relay: EventRelay | None = None,
        http=None,
    ):
        self.repo = repo
        self.settings = settings
        self.relay = relay
        self.http = http

    def emit(
        self,
        session: Session,
        tag: str,
        *,
        user_email: str | None = None,
        **subject: Any,
    ) -> dict[str, Any] | None:
        """
        Emit `{"event": tag, **subject}`.

        `subject` is the JSON-ready part of the payload, usually
        `user={...}` or `device={...}`. Returns the event, or None when
        webhooks are disabled.
        """
        if not self.settings.WEBHOOKS_ENABLED:
            return None

        event = {"event": tag, **subject}
        self.repo.append(session, user_email, tag, event)

        if self.settings.WEBHOOK_URL:
            post_event(
                self.settings.WEBHOOK_URL,
                event,
                timeout=self.settings.WEBHOOK_TIMEOUT,
                http=self.http,
            )
        elif self.relay is not None:
            self.relay.publish(event)
        else:
            logger.debug("No relay configured, dropping %s", tag)
        return event


webhook_repo = WebhookRepository()


def get_event_service(
    relay: EventRelay = Depends(get_relay),
    settings: Settings = Depends(get_settings),
) -> EventService:
    """FastAPI dependency wiring the relay of the running app."""
    return EventService(webhook_repo, settings, relay=relay)

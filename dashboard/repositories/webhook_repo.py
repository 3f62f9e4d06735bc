# dashboard/repositories/webhook_repo.py
import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from dashboard.models.webhook import WebhookLogEntry

logger = logging.getLogger(__name__)


class WebhookRepository:
    """Audit trail of emitted events."""

    def append(
        self,
        session: Session,
        user_email: str | None,
        event: str,
        data: dict[str, Any],
    ) -> None:
        """Record one emitted event. Failures are logged, not raised."""
        try:
            session.add(
                WebhookLogEntry(
                    user_email=user_email,
                    event=event,
                    data=json.dumps(data, default=str),
                )
            )
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Error inserting webhook log for %s", event)

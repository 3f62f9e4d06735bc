# dashboard/models/webhook.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class WebhookLogEntry(SQLModel, table=True):
    """
    Audit row written for every emitted event, before it is dispatched.

    `data` is the JSON-serialized event payload.
    """

    __tablename__ = "webhooks"

    id: int | None = Field(default=None, primary_key=True)

    user_email: str | None = Field(default=None, max_length=255, index=True)
    event: str = Field(max_length=100)
    data: str | None = None

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

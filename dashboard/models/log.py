# dashboard/models/log.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class LogEntry(SQLModel, table=True):
    """
    Append-only operation log shown on the dashboard.

    eventType is "Info" or "Error" in practice.
    """

    __tablename__ = "logs"

    id: int | None = Field(default=None, primary_key=True)

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
    )

    eventType: str | None = Field(default=None, max_length=100)
    eventDescription: str | None = None

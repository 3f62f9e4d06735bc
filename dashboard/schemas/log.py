# dashboard/schemas/log.py
from datetime import datetime

from sqlmodel import SQLModel


class LogRead(SQLModel):
    """One row of the dashboard activity feed."""

    timestamp: datetime
    eventType: str | None = None
    eventDescription: str | None = None

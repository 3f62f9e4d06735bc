# dashboard/models/device.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class DeviceRecord(SQLModel, table=True):
    """
    Device registered by a user.

    Under the "counting" strategy there is one row per (email, deviceId)
    and deviceCount tracks re-registrations. Under the "insert" strategy
    every registration is its own row with the client-supplied count.
    """

    __tablename__ = "devices"

    id: int | None = Field(default=None, primary_key=True)

    email: str | None = Field(default=None, max_length=255, index=True)
    deviceId: str | None = Field(default=None, max_length=255)
    deviceCount: int | None = None

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

# dashboard/schemas/device.py
from sqlmodel import Field

from dashboard.schemas.common import RequestBody, MessageResponse


class DeviceCreate(RequestBody):
    """
    Device registration payload.

    deviceCount is only honoured by the "insert" strategy; the counting
    strategy derives it from previous registrations.
    """

    email: str | None = None
    deviceId: str | None = None
    deviceCount: int | None = Field(default=None, ge=1)


class DeviceSaved(MessageResponse):
    deviceCount: int

# dashboard/services/device_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from dashboard.core.errors import ValidationError
from dashboard.models.device import DeviceRecord
from dashboard.repositories.device_repo import DeviceRepository
from dashboard.repositories.log_repo import LogRepository
from dashboard.schemas.device import DeviceCreate, DeviceSaved
from dashboard.services.base import LoggedService
from dashboard.services.event_service import EventService


class CountingDeviceStrategy:
    """
    One row per (email, deviceId).

    A repeated registration increments deviceCount; the first one inserts
    with deviceCount=1. The client-sent count is ignored.
    """

    name = "counting"

    def register(
        self,
        repo: DeviceRepository,
        session: Session,
        payload: DeviceCreate,
    ) -> tuple[DeviceRecord, str, str]:
        existing = repo.get(session, payload.email, payload.deviceId)
        if existing:
            device = repo.increment(session, existing)
            return device, "device_updated", "Device count updated successfully."

        device = repo.create(
            session,
            DeviceRecord(email=payload.email, deviceId=payload.deviceId, deviceCount=1),
        )
        return device, "device_inserted", "Device registered successfully."


class InsertDeviceStrategy:
    """Every registration is a new row carrying the client-sent count (default 1)."""

    name = "insert"

    def register(
        self,
        repo: DeviceRepository,
        session: Session,
        payload: DeviceCreate,
    ) -> tuple[DeviceRecord, str, str]:
        device = repo.create(
            session,
            DeviceRecord(
                email=payload.email,
                deviceId=payload.deviceId,
                deviceCount=payload.deviceCount or 1,
            ),
        )
        return device, "device_data_saved", "Device data saved successfully."


DEVICE_STRATEGIES = {
    CountingDeviceStrategy.name: CountingDeviceStrategy(),
    InsertDeviceStrategy.name: InsertDeviceStrategy(),
}


class DeviceService(LoggedService):
    """
    Device registration.

    The strategy is picked from DEVICE_STRATEGY at request time, see
    `dashboard.routers.devices.get_device_service`.
    """

    def __init__(self, repo: DeviceRepository, logs: LogRepository, strategy):
        super().__init__(logs)
        self.repo = repo
        self.strategy = strategy

    def save_device(
        self,
        session: Session,
        events: EventService,
        payload: DeviceCreate,
    ) -> DeviceSaved:
        """
        Raises:
            ValidationError(400): if email or deviceId is missing.
            StoreError(500): on database failure.
        """
        if not payload.email or not payload.deviceId:
            self._error(session, "Missing required device fields.")
            raise ValidationError("Missing required device fields.")

        try:
            device, tag, message = self.strategy.register(self.repo, session, payload)
        except SQLAlchemyError as exc:
            self._store_failed(
                session, f"Error saving device data for user {payload.email}", exc
            )

        subject = {
            "email": device.email,
            "deviceId": device.deviceId,
            "deviceCount": device.deviceCount,
        }
        self._info(
            session,
            f"Device {payload.deviceId} saved for user {payload.email} "
            f"(count {device.deviceCount}).",
        )
        events.emit(session, tag, user_email=payload.email, device=subject)
        return DeviceSaved(message=message, deviceCount=subject["deviceCount"])

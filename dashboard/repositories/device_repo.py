# dashboard/repositories/device_repo.py
from datetime import datetime, timezone

from sqlmodel import Session, select

from dashboard.models.device import DeviceRecord


class DeviceRepository:

    def get(self, session: Session, email: str, device_id: str) -> DeviceRecord | None:
        stmt = select(DeviceRecord).where(
            DeviceRecord.email == email, DeviceRecord.deviceId == device_id
        )
        return session.exec(stmt).first()

    def create(self, session: Session, device: DeviceRecord) -> DeviceRecord:
        session.add(device)
        session.commit()
        session.refresh(device)
        return device

    def increment(self, session: Session, device: DeviceRecord) -> DeviceRecord:
        """Bump deviceCount by one and refresh the timestamp."""
        device.deviceCount = (device.deviceCount or 0) + 1
        device.timestamp = datetime.now(timezone.utc)
        session.add(device)
        session.commit()
        session.refresh(device)
        return device

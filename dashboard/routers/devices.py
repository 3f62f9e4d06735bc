# dashboard/routers/devices.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from dashboard.core.config import Settings, get_settings
from dashboard.database import get_session
from dashboard.repositories.device_repo import DeviceRepository
from dashboard.repositories.log_repo import LogRepository
from dashboard.schemas.device import DeviceCreate, DeviceSaved
from dashboard.services.device_service import DEVICE_STRATEGIES, DeviceService
from dashboard.services.event_service import EventService, get_event_service

router = APIRouter(tags=["Devices"])

device_repo = DeviceRepository()
log_repo = LogRepository()


def get_device_service(settings: Settings = Depends(get_settings)) -> DeviceService:
    """DeviceService using the DEVICE_STRATEGY of the current settings."""
    return DeviceService(device_repo, log_repo, DEVICE_STRATEGIES[settings.DEVICE_STRATEGY])


# Both paths are used by deployed clients.
@router.post("/saveDeviceData", response_model=DeviceSaved)
@router.post("/storeDeviceInfo", response_model=DeviceSaved)
def save_device_data(
    payload: DeviceCreate,
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
    service: DeviceService = Depends(get_device_service),
):
    """
    Register a device for a user.

    400 when email or deviceId is missing.
    """
    return service.save_device(session, events, payload)

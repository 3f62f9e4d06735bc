# dashboard/routers/logs.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from dashboard.core.config import Settings, get_settings
from dashboard.database import get_session
from dashboard.repositories.log_repo import LogRepository
from dashboard.schemas.log import LogRead
from dashboard.services.event_service import EventService, get_event_service
from dashboard.services.log_service import LogService

router = APIRouter(tags=["Logs"])

service = LogService(LogRepository())


@router.get("/logs", response_model=list[LogRead])
def list_logs(
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
    settings: Settings = Depends(get_settings),
):
    """Most recent log entries, newest first (RECENT_LOGS_LIMIT, default 50)."""
    return service.recent_logs(session, events, limit=settings.RECENT_LOGS_LIMIT)

# dashboard/services/log_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from dashboard.models.log import LogEntry
from dashboard.services.base import LoggedService
from dashboard.services.event_service import EventService


class LogService(LoggedService):
    """Read side of the activity log. Reading does not add log entries."""

    def recent_logs(
        self,
        session: Session,
        events: EventService,
        limit: int = 50,
    ) -> list[LogEntry]:
        try:
            rows = self.logs.recent(session, limit=limit)
        except SQLAlchemyError as exc:
            self._store_failed(session, "Error fetching logs", exc)

        events.emit(session, "logs_fetched", count=len(rows))
        return rows

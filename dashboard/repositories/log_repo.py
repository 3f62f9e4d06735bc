# dashboard/repositories/log_repo.py
import logging

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from dashboard.models.log import LogEntry

logger = logging.getLogger(__name__)


class LogRepository:
    """Append-only access to the logs table."""

    def append(self, session: Session, event_type: str, description: str) -> None:
        """
        Fire-and-forget insert.

        A failure is rolled back and written to the server log; it never
        reaches the caller.
        """
        try:
            session.add(LogEntry(eventType=event_type, eventDescription=description))
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Error inserting log (%s: %s)", event_type, description)

    def recent(self, session: Session, limit: int = 50) -> list[LogEntry]:
        """Newest entries first."""
        stmt = (
            select(LogEntry)
            .order_by(desc(LogEntry.timestamp), desc(LogEntry.id))
            .limit(limit)
        )
        return list(session.exec(stmt).all())

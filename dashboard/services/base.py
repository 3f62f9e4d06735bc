# dashboard/services/base.py
import logging
from typing import NoReturn

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from dashboard.core.errors import StoreError
from dashboard.repositories.log_repo import LogRepository

logger = logging.getLogger(__name__)


class LoggedService:
    """
    Shared plumbing for services whose every outcome lands in the logs table.

    Subclasses call `_info` after a successful operation and `_store_failed`
    from their `except SQLAlchemyError` blocks.
    """

    def __init__(self, logs: LogRepository):
        self.logs = logs

    def _info(self, session: Session, description: str) -> None:
        self.logs.append(session, "Info", description)

    def _error(self, session: Session, description: str) -> None:
        self.logs.append(session, "Error", description)

    def _store_failed(
        self,
        session: Session,
        message: str,
        exc: SQLAlchemyError,
    ) -> NoReturn:
        """
        Record a database failure and raise the generic 500.

        The driver message goes to the logs table and the server log only;
        the client sees `message`.
        """
        session.rollback()
        logger.error("%s: %s", message, exc)
        self._error(session, f"{message}: {exc}")
        raise StoreError(f"{message}.") from exc

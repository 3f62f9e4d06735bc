# dashboard/database.py
from sqlmodel import SQLModel, create_engine, Session

from dashboard.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Single shared engine
#
# - Postgres    : sslmode=require appended, one pooled connection
# - SQLite      : check_same_thread=False because sync route handlers
#                 run in FastAPI's thread pool
# - anything else (MySQL, ...) : one pooled connection, pre-ping
# ---------------------------------------------------------


def _build_engine(db_url: str, echo: bool = False):
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    if db_url.startswith("postgres") and "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return create_engine(
        db_url,
        echo=echo,         # set DB_ECHO=true to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = _build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session

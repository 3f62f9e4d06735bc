# dashboard/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dashboard.core.config import get_settings
from dashboard.core.relay import EventRelay
from dashboard.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from dashboard.models import user as _user_models  # noqa: F401
from dashboard.models import log as _log_models  # noqa: F401
from dashboard.models import device as _device_models  # noqa: F401
from dashboard.models import webhook as _webhook_models  # noqa: F401


# Routers
from dashboard.routers.users import router as users_router
from dashboard.routers.tokens import router as tokens_router
from dashboard.routers.logs import router as logs_router
from dashboard.routers.devices import router as devices_router
from dashboard.routers.relay import router as relay_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
      - Create the in-process event relay.

    Shutdown:
      - Close open event streams.
    """
    logger.info("Startup: connecting to the database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise

    app.state.relay = EventRelay()
    if settings.WEBHOOK_URL:
        logger.info(f"Startup: events go to external relay {settings.WEBHOOK_URL}")
    yield

    app.state.relay.close()
    logger.info("Shutdown: event streams closed.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors like any missing field: 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Malformed request body."},
    )


app.include_router(users_router, prefix=settings.API_PREFIX)
app.include_router(tokens_router, prefix=settings.API_PREFIX)
app.include_router(logs_router, prefix=settings.API_PREFIX)
app.include_router(devices_router, prefix=settings.API_PREFIX)
app.include_router(relay_router)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "dashboard-backend"}

# dashboard/relay_main.py
"""
Standalone event relay.

Run it next to the API when events should be relayed by a separate
process:

    uvicorn dashboard.relay_main:app --port 3002

and point the API at it with WEBHOOK_URL=http://localhost:3002/webhook.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.core.config import get_settings
from dashboard.core.relay import EventRelay
from dashboard.routers.relay import router as relay_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.relay = EventRelay()
    logger.info("Relay ready.")
    yield
    app.state.relay.close()


app = FastAPI(title="Dashboard Event Relay", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(relay_router)

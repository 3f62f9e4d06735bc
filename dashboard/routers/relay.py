# dashboard/routers/relay.py
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse, StreamingResponse

from dashboard.core.relay import EventRelay, get_relay

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Relay"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post("/webhook", response_class=PlainTextResponse)
def receive_webhook(
    event: Any = Body(...),
    relay: EventRelay = Depends(get_relay),
):
    """
    Accept any JSON event and fan it out to every /sse listener.

    Always answers 200 once the event is parsed; delivery problems stay on
    the relay side.
    """
    logger.info("Webhook received: %s", event)
    relay.publish(event)
    return "Webhook received"


@router.get("/sse")
async def stream_events(relay: EventRelay = Depends(get_relay)):
    """
    Open a `text/event-stream` connection.

    Each published event arrives as one `data: <json>` frame. The
    subscriber is removed when the client disconnects.
    """
    subscriber = relay.subscribe()

    async def event_stream():
        try:
            async for frame in subscriber.frames():
                yield frame
        finally:
            relay.unsubscribe(subscriber)

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )

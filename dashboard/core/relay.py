# dashboard/core/relay.py
"""
In-process event relay (Server-Sent Events fan-out).

Responsibilities:
  - keep the ordered set of live subscribers
  - serialize each published event once and hand the same frame to
    every subscriber, in registration order
  - isolate failures: one broken subscriber never stops the others and
    never raises to the publisher

There is no replay, acknowledgement or backpressure. A listener that is not
subscribed when `publish` runs never sees that event.

Publishers may run on any thread (sync FastAPI handlers run in the thread
pool), so the subscriber list is guarded by a lock and stream subscribers
hand frames to their own event loop with `call_soon_threadsafe`.
"""
from __future__ import annotations

import asyncio
import json
import logging
import threading
from typing import Any, AsyncIterator, Protocol

from fastapi import Request

from dashboard.core.errors import RelayDeliveryError

logger = logging.getLogger(__name__)


def encode_frame(event: Any) -> str:
    """Serialize an event to a single SSE `data:` frame."""
    return f"data: {json.dumps(event, default=str)}\n\n"


class Subscriber(Protocol):
    def deliver(self, frame: str) -> None: ...


class StreamSubscriber:
    """
    Queue-backed subscriber feeding one open `text/event-stream` response.

    Must be created inside the event loop that serves the response.
    After `close()` further frames are dropped and `frames()` ends.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop or asyncio.get_running_loop()
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def deliver(self, frame: str) -> None:
        if self._closed:
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, frame)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self._loop.is_closed():
            # None is the end-of-stream sentinel
            self._loop.call_soon_threadsafe(self._queue.put_nowait, None)

    async def frames(self) -> AsyncIterator[str]:
        while True:
            frame = await self._queue.get()
            if frame is None:
                return
            yield frame


class EventRelay:
    """
    Lifecycle-scoped broadcaster.

    Created in the application lifespan and stored on `app.state.relay`;
    routes get it through `get_relay`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, subscriber: Subscriber | None = None) -> Subscriber:
        """
        Register a subscriber and return its handle.

        Without an argument a `StreamSubscriber` bound to the running loop
        is created.
        """
        if subscriber is None:
            subscriber = StreamSubscriber()
        with self._lock:
            self._subscribers.append(subscriber)
            count = len(self._subscribers)
        logger.info("Relay: subscriber connected (%d active)", count)
        return subscriber

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove a subscriber. Calling it twice is harmless."""
        with self._lock:
            try:
                self._subscribers.remove(subscriber)
            except ValueError:
                return
            count = len(self._subscribers)

        close = getattr(subscriber, "close", None)
        if close is not None:
            close()
        logger.info("Relay: subscriber disconnected (%d active)", count)

    def publish(self, event: Any) -> int:
        """
        Deliver `event` to every current subscriber.

        Iterates over a snapshot, so subscribers may come and go while a
        publish is running. Returns the number of successful deliveries.
        """
        frame = encode_frame(event)
        with self._lock:
            targets = list(self._subscribers)

        delivered = 0
        for subscriber in targets:
            try:
                subscriber.deliver(frame)
            except Exception as exc:
                logger.warning("Relay: %s", RelayDeliveryError(subscriber, exc))
                continue
            delivered += 1
        return delivered

    def close(self) -> None:
        """Drop and close every subscriber (application shutdown)."""
        with self._lock:
            targets = list(self._subscribers)
        for subscriber in targets:
            self.unsubscribe(subscriber)


def get_relay(request: Request) -> EventRelay:
    """FastAPI dependency returning the relay created in the lifespan."""
    return request.app.state.relay

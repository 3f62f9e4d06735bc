import asyncio
import json
import threading

from fastapi.testclient import TestClient

from conftest import BrokenSubscriber, RecordingSubscriber
from dashboard.core.relay import EventRelay, StreamSubscriber, encode_frame
from dashboard.relay_main import app as relay_app
from dashboard.routers.relay import stream_events


def test_encode_frame():
    assert encode_frame({"event": "ping"}) == 'data: {"event": "ping"}\n\n'


def test_subscriber_receives_exactly_one_frame():
    relay = EventRelay()
    subscriber = relay.subscribe(RecordingSubscriber())

    delivered = relay.publish({"event": "user_checked", "user": {"email": "a@x.com"}})

    assert delivered == 1
    assert subscriber.events == [{"event": "user_checked", "user": {"email": "a@x.com"}}]


def test_unsubscribed_listener_gets_nothing():
    relay = EventRelay()
    subscriber = relay.subscribe(RecordingSubscriber())
    relay.unsubscribe(subscriber)

    assert relay.publish({"event": "late"}) == 0
    assert subscriber.frames == []


def test_late_subscriber_misses_earlier_events():
    relay = EventRelay()
    relay.publish({"event": "early"})
    subscriber = relay.subscribe(RecordingSubscriber())
    relay.publish({"event": "late"})

    assert subscriber.events == [{"event": "late"}]


def test_broken_subscriber_does_not_stop_delivery():
    relay = EventRelay()
    subscribers = [RecordingSubscriber(), BrokenSubscriber(), RecordingSubscriber()]
    for subscriber in subscribers:
        relay.subscribe(subscriber)

    delivered = relay.publish({"event": "token_stored"})

    assert delivered == 2
    assert subscribers[1].attempts == 1
    assert subscribers[0].events == [{"event": "token_stored"}]
    assert subscribers[2].events == [{"event": "token_stored"}]


def test_delivery_follows_registration_order():
    relay = EventRelay()
    order = []

    class Named:
        def __init__(self, name):
            self.name = name

        def deliver(self, frame):
            order.append(self.name)

    for name in ("first", "second", "third"):
        relay.subscribe(Named(name))

    relay.publish({"event": "x"})

    assert order == ["first", "second", "third"]


def test_unsubscribe_twice_is_harmless():
    relay = EventRelay()
    subscriber = relay.subscribe(RecordingSubscriber())
    relay.unsubscribe(subscriber)
    relay.unsubscribe(subscriber)
    assert len(relay) == 0


def test_unsubscribe_during_publish():
    relay = EventRelay()
    victim = RecordingSubscriber()

    class Remover:
        def deliver(self, frame):
            relay.unsubscribe(victim)

    relay.subscribe(Remover())
    relay.subscribe(victim)

    relay.publish({"event": "x"})
    relay.publish({"event": "y"})

    # Removal applies from the next publish on; stream handles are closed
    # at once and drop anything still in flight.
    assert victim.events == [{"event": "x"}]
    assert len(relay) == 1


def test_concurrent_subscribe_and_publish():
    relay = EventRelay()
    stop = threading.Event()

    def churn():
        while not stop.is_set():
            relay.unsubscribe(relay.subscribe(RecordingSubscriber()))

    workers = [threading.Thread(target=churn) for _ in range(4)]
    for worker in workers:
        worker.start()
    try:
        for i in range(500):
            relay.publish({"event": "tick", "n": i})
    finally:
        stop.set()
        for worker in workers:
            worker.join()

    assert len(relay) == 0


def test_stream_subscriber_gets_frames_from_other_threads():
    async def scenario():
        relay = EventRelay()
        subscriber = relay.subscribe()
        frames = subscriber.frames()

        thread = threading.Thread(target=relay.publish, args=({"event": "ping"},))
        thread.start()
        thread.join()

        frame = await asyncio.wait_for(frames.__anext__(), timeout=1)
        relay.unsubscribe(subscriber)
        remaining = [f async for f in frames]
        return frame, remaining, subscriber

    frame, remaining, subscriber = asyncio.run(scenario())

    assert json.loads(frame[len("data: "):]) == {"event": "ping"}
    assert remaining == []
    assert subscriber.closed


def test_closed_stream_subscriber_drops_frames():
    async def scenario():
        subscriber = StreamSubscriber()
        subscriber.close()
        subscriber.deliver("data: {}\n\n")
        return [f async for f in subscriber.frames()]

    assert asyncio.run(scenario()) == []


def test_close_ends_every_stream():
    async def scenario():
        relay = EventRelay()
        subscribers = [relay.subscribe() for _ in range(3)]
        relay.close()
        return relay, subscribers

    relay, subscribers = asyncio.run(scenario())
    assert len(relay) == 0
    assert all(s.closed for s in subscribers)


def test_sse_endpoint_streams_and_unsubscribes():
    async def scenario():
        relay = EventRelay()
        response = await stream_events(relay=relay)
        assert len(relay) == 1

        relay.publish({"event": "device_inserted"})
        body = response.body_iterator
        frame = await asyncio.wait_for(body.__anext__(), timeout=1)

        # Simulates the client disconnecting.
        await body.aclose()
        return response, frame, relay

    response, frame, relay = asyncio.run(scenario())

    assert response.media_type == "text/event-stream"
    assert response.headers["cache-control"] == "no-cache"
    assert response.headers["connection"] == "keep-alive"
    assert frame == 'data: {"event": "device_inserted"}\n\n'
    assert len(relay) == 0


def test_webhook_route_fans_out(client):
    listeners = [RecordingSubscriber(), BrokenSubscriber(), RecordingSubscriber()]
    for listener in listeners:
        client.app.state.relay.subscribe(listener)

    response = client.post("/webhook", json={"event": "custom", "data": [1, 2]})

    assert response.status_code == 200
    assert response.text == "Webhook received"
    assert response.headers["content-type"].startswith("text/plain")
    assert listeners[0].events == [{"event": "custom", "data": [1, 2]}]
    assert listeners[2].events == [{"event": "custom", "data": [1, 2]}]


def test_standalone_relay_app():
    with TestClient(relay_app) as relay_client:
        listener = relay_client.app.state.relay.subscribe(RecordingSubscriber())
        response = relay_client.post("/webhook", json={"event": "user_signed_up"})

    assert response.status_code == 200
    assert listener.events == [{"event": "user_signed_up"}]

"""Tests for the session registry and realtime fan-out."""

import asyncio
import threading
from datetime import datetime, timezone

from chatline.infrastructure.realtime import ChatSession, RealtimeFanout, SessionRegistry


def test_registry_reports_first_and_last_session(recording_session):
    registry = SessionRegistry()
    phone, laptop = recording_session(1), recording_session(1)

    assert registry.add(phone) is True
    assert registry.add(laptop) is False
    assert registry.online_user_ids() == [1]
    assert registry.remove(phone) is False
    assert registry.remove(laptop) is True
    assert registry.remove(laptop) is False
    assert registry.online_user_ids() == []


def test_route_to_an_offline_user_is_a_no_op():
    fanout = RealtimeFanout()

    assert fanout.route(42, "new_message", {"id": 1}) == 0


def test_route_delivers_independent_copies(recording_session):
    fanout = RealtimeFanout()
    first, second = recording_session(1), recording_session(1)
    fanout.registry.add(first)
    fanout.registry.add(second)
    payload = {"messageId": 7}

    assert fanout.route(1, "message_delivered", payload) == 2
    first.events[0]["data"]["messageId"] = 99

    assert second.events[0]["data"] == {"messageId": 7}
    assert payload == {"messageId": 7}


def test_broadcast_gives_each_session_its_own_payload(recording_session):
    fanout = RealtimeFanout()
    alice, bob = recording_session(1), recording_session(2)
    fanout.registry.add(alice)
    fanout.registry.add(bob)
    payload = {"userId": 3, "tags": ["new"]}

    fanout.broadcast("user_online", payload)
    alice.events[0]["data"]["tags"].append("changed")

    assert bob.events[0]["data"] == {"userId": 3, "tags": ["new"]}
    assert payload == {"userId": 3, "tags": ["new"]}


def test_route_many_reaches_each_user_once(recording_session):
    fanout = RealtimeFanout()
    alice = recording_session(1)
    fanout.registry.add(alice)

    fanout.route_many([1, 1, 2], "message_deleted", {"messageId": 3})

    assert alice.types() == ["message_deleted"]


def test_connect_and_disconnect_announce_presence(recording_session):
    fanout = RealtimeFanout()
    watcher = recording_session(1)
    fanout.connect(watcher)
    phone, laptop = recording_session(2), recording_session(2)
    fanout.connect(phone)
    fanout.connect(laptop)
    last_seen = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)

    assert fanout.disconnect(phone) is False
    assert fanout.disconnect(laptop, last_seen=last_seen) is True

    online = [event["data"] for event in watcher.of_type("user_online")]
    offline = [event["data"] for event in watcher.of_type("user_offline")]
    assert online == [{"userId": 1}, {"userId": 2}, {"userId": 2}]
    assert offline == [{"userId": 2, "lastSeen": last_seen.isoformat()}]
    assert phone.closed and laptop.closed
    assert fanout.online_user_ids() == [1]


class _FakeSocket:
    def __init__(self) -> None:
        self.sent = []

    async def send_json(self, message):
        self.sent.append(message)


def test_chat_session_writes_events_in_order_from_other_threads():
    async def scenario():
        socket = _FakeSocket()
        session = ChatSession(5, socket)
        writer = asyncio.create_task(session.run_writer())

        def produce():
            for index in range(20):
                session.enqueue({"type": "new_message", "data": {"id": index}})

        worker = threading.Thread(target=produce)
        worker.start()
        await asyncio.get_running_loop().run_in_executor(None, worker.join)
        session.close()
        await asyncio.wait_for(writer, timeout=2)
        return socket.sent

    sent = asyncio.run(scenario())

    assert [message["data"]["id"] for message in sent] == list(range(20))


def test_closed_session_drops_events():
    async def scenario():
        socket = _FakeSocket()
        session = ChatSession(5, socket)
        session.close()
        session.enqueue({"type": "pong", "data": None})
        await session.run_writer()
        return socket.sent, session.closed

    sent, closed = asyncio.run(scenario())

    assert sent == []
    assert closed

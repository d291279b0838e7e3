# backend/tests/test_notifications.py
import asyncio
import json

import pytest
from fastapi import WebSocketDisconnect

from routes.notifications import websocket_endpoint
from utils.notifications import NEW_COMMENT, ConnectionManager, manager


class FakeSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(json.loads(message))


def test_broadcast_reaches_every_open_socket():
    manager = ConnectionManager()
    first, second = FakeSocket(), FakeSocket()

    async def scenario():
        await manager.connect(first)
        await manager.connect(second)
        await manager.broadcast(NEW_COMMENT, {"projectId": "p1"})

    asyncio.run(scenario())
    assert first.accepted and second.accepted
    expected = {"type": "new_comment", "data": {"projectId": "p1"}}
    assert first.sent == [expected]
    assert second.sent == [expected]


def test_failing_socket_is_dropped():
    manager = ConnectionManager()
    healthy, broken = FakeSocket(), FakeSocket(fail=True)

    async def scenario():
        await manager.connect(healthy)
        await manager.connect(broken)
        await manager.broadcast(NEW_COMMENT, {})
        await manager.broadcast(NEW_COMMENT, {})

    asyncio.run(scenario())
    assert broken not in manager.active
    assert len(healthy.sent) == 2


def test_disconnect_stops_delivery():
    manager = ConnectionManager()
    socket = FakeSocket()

    async def scenario():
        await manager.connect(socket)
        manager.disconnect(socket)
        await manager.broadcast(NEW_COMMENT, {})

    asyncio.run(scenario())
    assert socket.sent == []
    manager.disconnect(socket)  # second call is a no-op


class BrokenReceiveSocket(FakeSocket):
    async def receive_text(self):
        raise RuntimeError("connection reset")


def test_socket_is_released_when_receive_fails():
    socket = BrokenReceiveSocket()
    with pytest.raises(RuntimeError):
        asyncio.run(websocket_endpoint(socket))
    assert socket.accepted
    assert socket not in manager.active


def test_socket_is_released_on_disconnect():
    class ClosingSocket(FakeSocket):
        async def receive_text(self):
            raise WebSocketDisconnect()

    socket = ClosingSocket()
    asyncio.run(websocket_endpoint(socket))
    assert socket not in manager.active

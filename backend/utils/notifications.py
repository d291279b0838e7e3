# utils/notifications.py
import json
import logging
from typing import Any, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)

NEW_COMMENT = "new_comment"


class ConnectionManager:
    """Open dashboard sockets. Broadcasts are best effort: no ack, no replay."""

    def __init__(self):
        self.active: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active.add(websocket)
        logger.debug("WebSocket connected (%d open)", len(self.active))

    def disconnect(self, websocket: WebSocket):
        self.active.discard(websocket)
        logger.debug("WebSocket disconnected (%d open)", len(self.active))

    async def broadcast(self, event_type: str, data: Any):
        message = json.dumps({"type": event_type, "data": data})
        for websocket in list(self.active):
            try:
                await websocket.send_text(message)
            except Exception as e:  # socket went away mid-send
                logger.debug("Dropping websocket after send error: %s", e)
                self.disconnect(websocket)


manager = ConnectionManager()


def get_notifier() -> ConnectionManager:
    return manager

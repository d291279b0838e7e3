# backend/routes/notifications.py
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from utils.notifications import manager

router = APIRouter(tags=["Notifications"])


# Live feed for the admin dashboard; client messages are ignored
@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await manager.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)

"""
WebSocket chat endpoint.
"""

import logging

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


async def websocket_chat(websocket: WebSocket) -> None:
    """
    Serve one widget connection.

    Frames are handled one at a time, so a client's turns never overlap;
    other connections keep running while this one waits on the model.
    """
    gateway = websocket.app.state.services.gateway

    await websocket.accept()
    state = gateway.open_connection()

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""

            await gateway.handle_raw(state, raw, websocket)
    except WebSocketDisconnect:
        pass
    finally:
        gateway.close_connection(state)

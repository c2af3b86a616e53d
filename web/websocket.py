"""
MicroEstado Engine v1.0 — WebSocket Manager
Pushes state snapshots, log entries and level changes to connected clients.
"""

import json
import asyncio
import logging
from fastapi import WebSocket

logger = logging.getLogger("microestado.websocket")


class ConnectionManager:
    """Manages active WebSocket connections and broadcasts events."""

    def __init__(self):
        self.active: list[WebSocket] = []
        self._loop: asyncio.AbstractEventLoop = None

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self._loop = asyncio.get_running_loop()
        self.active.append(ws)
        logger.debug(f"Client connected ({self.client_count} active)")

    def disconnect(self, ws: WebSocket):
        if ws in self.active:
            self.active.remove(ws)
            logger.debug(f"Client disconnected ({self.client_count} active)")

    async def broadcast(self, event: str, data: dict = None):
        """Send an event to all connected clients."""
        message = json.dumps({"event": event, "data": data or {}}, default=str)
        disconnected = []
        for ws in list(self.active):
            try:
                await ws.send_text(message)
            except Exception as e:
                logger.debug(f"Send failed, dropping client: {e}")
                disconnected.append(ws)
        for ws in disconnected:
            self.disconnect(ws)

    def broadcast_sync(self, event: str, data: dict = None):
        """
        Broadcast from plain code. Inside the event loop the send is
        scheduled as a task; from another thread (the ticker) it is handed
        to the loop the clients connected on. No loop, no clients: skip.
        """
        try:
            loop = asyncio.get_running_loop()
            loop.create_task(self.broadcast(event, data))
            return
        except RuntimeError:
            pass
        if self._loop is not None and self._loop.is_running() and self.active:
            asyncio.run_coroutine_threadsafe(self.broadcast(event, data), self._loop)

    @property
    def client_count(self) -> int:
        return len(self.active)

"""Websocket connection registry for realtime delivery."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Keep the open websockets of every connected user."""

    def __init__(self) -> None:
        self._connections: defaultdict[int, set[WebSocket]] = defaultdict(set)

    async def connect(self, user_id: int, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections[user_id].add(websocket)
        logger.debug("Websocket opened for user %s", user_id)

    def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        sockets = self._connections.get(user_id)
        if sockets is None:
            return
        sockets.discard(websocket)
        if not sockets:
            self._connections.pop(user_id, None)

    def is_connected(self, user_id: int) -> bool:
        return bool(self._connections.get(user_id))

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> None:
        """Send ``message`` to each socket of ``user_id``, dropping broken ones."""

        for websocket in list(self._connections.get(user_id, ())):
            try:
                await websocket.send_json(message)
            except Exception:
                logger.info("Dropping stale websocket for user %s", user_id)
                self.disconnect(user_id, websocket)


connection_manager = ConnectionManager()


__all__ = ["ConnectionManager", "connection_manager"]

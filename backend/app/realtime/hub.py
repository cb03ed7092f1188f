"""
Connection registry and room membership for the /ws channel.

One ``RealtimeHub`` lives on ``app.state.realtime`` for the lifetime of the
app. Each accepted WebSocket gets a ``ClientSession`` holding that client's
identity, last known location and received notifications; the session is
created on connect, reset on logout and dropped on disconnect.

Delivery is best-effort: a failed send drops the connection and nothing is
retried or persisted.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Set
from uuid import uuid4

from starlette.websockets import WebSocket, WebSocketDisconnect

logger = logging.getLogger("neighbor_alert.realtime")


class ClientSession:
    def __init__(self, websocket: WebSocket):
        self.sid = uuid4().hex
        self.websocket = websocket
        self.user_id: Optional[str] = None
        self.user_name: Optional[str] = None
        self.location: Optional[dict] = None
        self.rooms: Set[str] = set()
        self.notifications: List[dict] = []

    def add_notification(self, alert: dict) -> None:
        self.notifications.append(alert)

    def dismiss_notification(self, alert_id: str) -> int:
        before = len(self.notifications)
        self.notifications = [n for n in self.notifications if n.get("_id") != alert_id]
        return before - len(self.notifications)

    def reset(self) -> None:
        self.user_id = None
        self.user_name = None
        self.location = None
        self.notifications = []

    async def emit(self, event: str, data: Any) -> None:
        await self.websocket.send_json({"event": event, "data": data})

    def __repr__(self) -> str:
        return f"<ClientSession {self.sid[:8]} user={self.user_id}>"


class RealtimeHub:
    def __init__(self):
        self.sessions: Dict[str, ClientSession] = {}
        self.rooms: Dict[str, Set[str]] = defaultdict(set)

    def connect(self, session: ClientSession) -> None:
        self.sessions[session.sid] = session
        logger.info("Client connected: %s", session.sid)

    def disconnect(self, session: ClientSession) -> None:
        if self.sessions.pop(session.sid, None) is None:
            return
        self.leave_all(session)
        logger.info("Client disconnected: %s", session.sid)

    def join(self, session: ClientSession, room: str) -> None:
        self.rooms[room].add(session.sid)
        session.rooms.add(room)
        logger.info("Session %s joined room %s", session.sid[:8], room, extra={"room": room})

    def leave(self, session: ClientSession, room: str) -> None:
        members = self.rooms.get(room)
        if members is not None:
            members.discard(session.sid)
            if not members:
                del self.rooms[room]
        session.rooms.discard(room)

    def leave_all(self, session: ClientSession) -> None:
        for room in list(session.rooms):
            self.leave(session, room)

    def room_members(self, room: str) -> List[ClientSession]:
        return [self.sessions[sid] for sid in self.rooms.get(room, ()) if sid in self.sessions]

    async def emit_to_room(self, room: str, event: str, data: Any) -> int:
        return await self._deliver_all(self.room_members(room), event, data)

    async def broadcast(self, event: str, data: Any, *, exclude: Optional[ClientSession] = None) -> int:
        targets = [s for s in self.sessions.values() if s is not exclude]
        return await self._deliver_all(targets, event, data)

    async def _deliver_all(self, targets: Iterable[ClientSession], event: str, data: Any) -> int:
        delivered = 0
        for session in list(targets):
            if await self._deliver(session, event, data):
                delivered += 1
        return delivered

    async def _deliver(self, session: ClientSession, event: str, data: Any) -> bool:
        try:
            await session.emit(event, data)
        except (WebSocketDisconnect, RuntimeError) as exc:
            logger.warning("Dropping session %s after failed %s: %s", session.sid[:8], event, exc)
            self.disconnect(session)
            return False
        return True

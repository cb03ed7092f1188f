"""Client -> server event handlers for the /ws channel."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from pydantic import ValidationError

from app.models.alert import AlertResponse
from app.models.realtime import DismissNotification, Envelope, UpdateLocation, UserJoin
from app.realtime.hub import ClientSession, RealtimeHub

logger = logging.getLogger("neighbor_alert.realtime")

Handler = Callable[[RealtimeHub, ClientSession, Any], Awaitable[None]]


async def on_user_join(hub: RealtimeHub, session: ClientSession, data: Any) -> None:
    join = UserJoin.model_validate(data)
    if session.user_id and session.user_id != join.userId:
        hub.leave(session, session.user_id)
    session.user_id = join.userId
    session.user_name = join.userName
    if join.location is not None:
        session.location = join.location.model_dump()
    hub.join(session, join.userId)


async def on_update_location(hub: RealtimeHub, session: ClientSession, data: Any) -> None:
    update = UpdateLocation.model_validate(data)
    location = update.location.model_dump()
    if session.user_id == update.userId:
        session.location = location
    await hub.emit_to_room(update.userId, "location_updated", location)


async def on_new_alert(hub: RealtimeHub, session: ClientSession, data: Any) -> None:
    # Relayed to every other connected client; no geographic targeting.
    alert = AlertResponse.model_validate(data).model_dump(mode="json", by_alias=True)
    recipients = [s for s in hub.sessions.values() if s is not session]
    for recipient in recipients:
        recipient.add_notification(alert)
    delivered = await hub.broadcast("alert_notification", alert, exclude=session)
    logger.info(
        "Relayed alert %s to %d client(s)", alert["_id"], delivered,
        extra={"alert_id": alert["_id"]},
    )


async def on_dismiss_notification(hub: RealtimeHub, session: ClientSession, data: Any) -> None:
    dismiss = DismissNotification.model_validate(data)
    session.dismiss_notification(dismiss.id)


async def on_get_notifications(hub: RealtimeHub, session: ClientSession, data: Any) -> None:
    await session.emit("notifications", list(session.notifications))


async def on_logout(hub: RealtimeHub, session: ClientSession, data: Any) -> None:
    hub.leave_all(session)
    session.reset()


HANDLERS: Dict[str, Handler] = {
    "user_join": on_user_join,
    "update_location": on_update_location,
    "new_alert": on_new_alert,
    "dismiss_notification": on_dismiss_notification,
    "get_notifications": on_get_notifications,
    "logout": on_logout,
}


async def dispatch(hub: RealtimeHub, session: ClientSession, raw: str) -> None:
    """Parse one text frame and run its handler; problems go back to the sender as ``error``."""
    try:
        envelope = Envelope.model_validate_json(raw)
    except ValidationError:
        await session.emit("error", {"message": "Malformed message"})
        return

    handler = HANDLERS.get(envelope.event)
    if handler is None:
        await session.emit("error", {"message": f"Unknown event: {envelope.event}"})
        return

    try:
        await handler(hub, session, envelope.data)
    except ValidationError:
        logger.info("Invalid %s payload from %s", envelope.event, session.sid[:8])
        await session.emit("error", {"message": f"Invalid data for {envelope.event}"})

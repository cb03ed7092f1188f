"""WebSocket endpoint for realtime alert fanout."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.realtime import ClientSession, RealtimeHub, dispatch

router = APIRouter()


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket) -> None:
    hub: RealtimeHub = websocket.app.state.realtime
    await websocket.accept()
    session = ClientSession(websocket)
    hub.connect(session)
    try:
        while True:
            raw = await websocket.receive_text()
            await dispatch(hub, session, raw)
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(session)

"""Realtime fanout over WebSockets: sessions, rooms and event handlers."""

from app.realtime.hub import ClientSession, RealtimeHub
from app.realtime.handlers import dispatch

__all__ = ["ClientSession", "RealtimeHub", "dispatch"]

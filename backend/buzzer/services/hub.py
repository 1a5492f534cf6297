import threading
from typing import Any, Dict, Optional


def room_for(sid: str) -> str:
    return f"session:{sid}"


class BroadcastHub:
    """Session-scoped fan-out on top of Flask-SocketIO rooms.

    Each session maps to one room; a connection (Socket.IO sid, called a
    channel here to avoid clashing with session ids) subscribes by entering
    it. Emits are queued by the Socket.IO server and never awaited.
    """

    def __init__(self, socketio, namespace: str = '/') -> None:
        self.socketio = socketio
        self.namespace = namespace
        self._lock = threading.Lock()
        self._channels: Dict[str, Dict[str, Any]] = {}

    def subscribe(self, sid: str, channel: str, role: Optional[str] = None, name: Optional[str] = None) -> None:
        self.socketio.server.enter_room(channel, room_for(sid), namespace=self.namespace)
        with self._lock:
            self._channels[channel] = {'sid': sid, 'role': role or 'player', 'name': name or None}

    def publish(self, sid: str, event: str, payload: Any = None) -> None:
        self._emit(event, payload, room_for(sid))

    def send(self, channel: str, event: str, payload: Any = None) -> None:
        self._emit(event, payload, channel)

    def context(self, channel: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._channels.get(channel)

    def forget(self, channel: str) -> Optional[Dict[str, Any]]:
        # Room membership is dropped by Socket.IO itself on disconnect
        with self._lock:
            return self._channels.pop(channel, None)

    def _emit(self, event: str, payload: Any, to: str) -> None:
        args = () if payload is None else (payload,)
        self.socketio.emit(event, *args, to=to, namespace=self.namespace)

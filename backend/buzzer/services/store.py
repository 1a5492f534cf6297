import threading
from typing import Dict

from buzzer.errors import AlreadyExists, InvalidId, NotFound
from buzzer.models import Session
from buzzer.validators import valid_sid


class SessionStore:
    """In-memory owner of every Session, keyed by 4-digit id.

    The store lock only covers the id -> Session map. Mutating a session is
    guarded by that session's own lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}

    def create(self, sid: str) -> Session:
        if not valid_sid(sid):
            raise InvalidId()
        with self._lock:
            if sid in self._sessions:
                raise AlreadyExists()
            session = Session(sid)
            self._sessions[sid] = session
            return session

    def get(self, sid: str) -> Session:
        if not valid_sid(sid):
            raise NotFound()
        with self._lock:
            session = self._sessions.get(sid)
        if session is None:
            raise NotFound()
        return session

    def get_or_create(self, sid: str) -> Session:
        if not valid_sid(sid):
            raise InvalidId()
        with self._lock:
            session = self._sessions.get(sid)
            if session is None:
                session = Session(sid)
                self._sessions[sid] = session
            return session

    def __contains__(self, sid) -> bool:
        with self._lock:
            return sid in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

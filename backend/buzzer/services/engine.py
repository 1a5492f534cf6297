import itertools
import logging
import threading
from typing import Callable, List, Optional

from buzzer.errors import InvalidName, NameTaken, NotFound
from buzzer.models import BUZZED, FOUL, IDLE, Session, Submission, now_ms
from buzzer.services.hub import BroadcastHub
from buzzer.services.store import SessionStore
from buzzer.validators import valid_name, valid_sid

ACCEPTED = 'accepted'
FOULED = 'fouled'
IGNORED = 'ignored'


class SessionEngine:
    """Session state machine and buzz arbitration.

    Every transition holds the session lock for its whole duration, including
    the broadcasts it triggers, so subscribers see events in the same order
    the state changed. Ranking uses (timestamp, sequence_no); the sequence
    counter is shared by all sessions of this engine.
    """

    def __init__(
        self,
        store: SessionStore,
        hub: BroadcastHub,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], int] = now_ms,
        auto_create: bool = False,
    ) -> None:
        self.store = store
        self.hub = hub
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock
        self.auto_create = auto_create
        self._sequence = itertools.count(1)
        self._sequence_lock = threading.Lock()

    # ---- lookups ----

    def _resolve(self, sid: str) -> Session:
        if self.auto_create:
            if not valid_sid(sid):
                raise NotFound()
            return self.store.get_or_create(sid)
        return self.store.get(sid)

    def _find(self, sid) -> Optional[Session]:
        try:
            return self.store.get(sid)
        except NotFound:
            return None

    def _next_sequence(self) -> int:
        with self._sequence_lock:
            return next(self._sequence)

    # ---- transitions ----

    def create(self, sid: str) -> Session:
        session = self.store.create(sid)
        self.logger.info(f"[create] sid={sid}")
        return session

    def join(self, sid: str, name: str) -> Session:
        session = self._resolve(sid)
        if not valid_name(name):
            raise InvalidName()
        name = name.strip()
        with session.lock:
            if session.has_player(name):
                raise NameTaken()
            session.statuses[name] = IDLE
            players = session.players
            self.hub.publish(sid, 'player_joined', {'sid': sid, 'name': name, 'players': players})
        self.logger.info(f"[join] sid={sid} name={name} players={len(players)}")
        return session

    def start(self, sid: str) -> bool:
        session = self._find(sid)
        if session is None:
            self.logger.debug(f"[start-skip] sid={sid!r} not found")
            return False
        with session.lock:
            session.active = True
            self.hub.publish(sid, 'game_state', {'active': True})
        self.logger.info(f"[start] sid={sid}")
        return True

    def reset(self, sid: str) -> bool:
        session = self._find(sid)
        if session is None:
            self.logger.debug(f"[reset-skip] sid={sid!r} not found")
            return False
        with session.lock:
            session.active = False
            session.submissions = []
            for name in session.statuses:
                session.statuses[name] = IDLE
            self.hub.publish(sid, 'reset')
            self.hub.publish(sid, 'game_state', {'active': False})
            self.hub.publish(sid, 'state', session.to_dict())
        self.logger.info(f"[reset] sid={sid}")
        return True

    def buzz(self, sid: str, name: str, channel: Optional[str] = None) -> str:
        """Arbitrate one buzz press and return ACCEPTED, FOULED or IGNORED.

        A press while the round is not active is a foul, reported only to the
        pressing connection. A foul sticks until reset: the player cannot
        buzz, nor foul again, before then. An active round accepts at most one
        buzz per player.
        """
        session = self._find(sid)
        if session is None or not valid_name(name):
            self.logger.debug(f"[buzz-skip] sid={sid!r} name={name!r} rejected")
            return IGNORED
        name = name.strip()
        with session.lock:
            if not session.has_player(name):
                self.logger.debug(f"[buzz-skip] sid={sid} name={name} not joined")
                return IGNORED
            state = session.status_of(name)

            if not session.active:
                if state == FOUL:
                    return IGNORED
                session.statuses[name] = FOUL
                if channel is not None:
                    self.hub.send(channel, 'you_fouled')
                self.logger.info(f"[foul] sid={sid} name={name}")
                return FOULED

            if state in (FOUL, BUZZED):
                return IGNORED

            submission = Submission(name, self.clock(), self._next_sequence())
            session.submissions.append(submission)
            session.statuses[name] = BUZZED
            self.hub.publish(sid, 'new_submission', {'name': name, 'timestamp': submission.timestamp})
        self.logger.info(f"[buzz] sid={sid} name={name} ts={submission.timestamp} seq={submission.sequence_no}")
        return ACCEPTED

    def subscribe(self, sid: str, channel: str, role: Optional[str] = None, name: Optional[str] = None) -> Session:
        session = self._resolve(sid)
        with session.lock:
            self.hub.subscribe(sid, channel, role=role, name=name)
            self.hub.send(channel, 'state', session.to_dict())
        self.logger.info(f"[subscribe] sid={sid} role={role or 'player'} name={name}")
        return session

    # ---- reads ----

    def snapshot(self, sid: str) -> dict:
        session = self.store.get(sid)
        with session.lock:
            return session.to_dict()

    def leaderboard(self, sid: str) -> List[Submission]:
        session = self.store.get(sid)
        with session.lock:
            return session.leaderboard()

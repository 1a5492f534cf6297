import threading
import time
from typing import Dict, List, NamedTuple, Optional

IDLE = 'idle'
BUZZED = 'buzzed'
FOUL = 'foul'


def now_ms() -> int:
    return int(time.time() * 1000)


class Submission(NamedTuple):
    name: str
    timestamp: int  # epoch milliseconds
    sequence_no: int

    @property
    def rank_key(self):
        return (self.timestamp, self.sequence_no)


class Session:
    """One buzzer room.

    Players and their statuses live in a single insertion-ordered mapping, so
    every joined player has exactly one status and display order is stable.
    The lock serialises every transition applied to this session.
    """

    def __init__(self, sid: str, created_at: Optional[int] = None):
        self.sid = sid
        self.active = False
        self.statuses: Dict[str, str] = {}
        self.submissions: List[Submission] = []
        self.created_at = created_at if created_at is not None else now_ms()
        self.lock = threading.Lock()

    @property
    def players(self) -> List[str]:
        return list(self.statuses)

    def has_player(self, name: str) -> bool:
        return name in self.statuses

    def status_of(self, name: str) -> str:
        return self.statuses.get(name, IDLE)

    def leaderboard(self) -> List[Submission]:
        return sorted(self.submissions, key=lambda s: s.rank_key)

    def to_dict(self):
        return {
            'sid': self.sid,
            'active': self.active,
            'players': self.players,
            'submissions': [
                {'position': idx, 'name': s.name, 'timestamp': s.timestamp}
                for idx, s in enumerate(self.leaderboard(), start=1)
            ],
        }

    def __repr__(self):
        return f"<Session {self.sid} active={self.active} players={len(self.statuses)}>"

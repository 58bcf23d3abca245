import threading
from contextlib import contextmanager


class SessionLocks:
    """One mutex per session id, dropped once nobody holds or waits on it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._waiters: dict[str, int] = {}

    @contextmanager
    def hold(self, session_id: str):
        with self._guard:
            lock = self._locks.setdefault(session_id, threading.Lock())
            self._waiters[session_id] = self._waiters.get(session_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._waiters[session_id] -= 1
                if not self._waiters[session_id]:
                    del self._waiters[session_id]
                    del self._locks[session_id]

    def __len__(self):
        return len(self._locks)

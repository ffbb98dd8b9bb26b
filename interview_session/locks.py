from __future__ import annotations  # Per-session mutual exclusion for mutating calls

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

from .errors import SessionBusy


class SessionLocks:  # Registry of reference-counted locks keyed by session id
    def __init__(self, timeout_s: float = 0.0) -> None:
        self._timeout_s = timeout_s
        self._guard = threading.Lock()
        self._locks: Dict[str, List] = {}  # session_id -> [lock, users]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _checkout(self, session_id: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(session_id)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._locks[session_id] = entry
            entry[1] += 1
            return entry[0]

    def _release(self, session_id: str) -> None:
        with self._guard:
            entry = self._locks.get(session_id)
            if entry is None:
                return
            entry[1] -= 1
            if entry[1] <= 0:
                del self._locks[session_id]

    @contextmanager
    def hold(self, session_id: str, *, phase: str | None = None) -> Iterator[None]:  # Acquire or raise SessionBusy
        lock = self._checkout(session_id)
        if self._timeout_s > 0:
            acquired = lock.acquire(timeout=self._timeout_s)
        else:
            acquired = lock.acquire(blocking=False)
        if not acquired:
            self._release(session_id)
            raise SessionBusy(
                "Another request is already updating this interview session",
                session_id=session_id,
                phase=phase,
            )
        try:
            yield
        finally:
            lock.release()
            self._release(session_id)


__all__ = ["SessionLocks"]

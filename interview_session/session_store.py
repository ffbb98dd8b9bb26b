"""Write-through session store over a bounded cache and the durable SQLite table.

The durable table is the source of truth. The cache is a derived view: it is
filled after a successful durable insert and refilled from the table on a read
miss, but a refill never replaces an entry a writer cached in the meantime.
Entries leave it through LRU eviction or after sitting idle for the TTL.
"""
from __future__ import annotations

import logging
import sqlite3
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple

from observability import log_event
from storage import sessions as session_rows

from .errors import DurableStoreError
from .models import Session, row_fields

logger = logging.getLogger(__name__)


class SessionCache:
    """Thread-safe LRU cache whose entries expire after ``ttl_s`` seconds idle."""

    def __init__(self, capacity: int = 256, ttl_s: float = 3600.0, clock: Callable[[], float] = time.monotonic) -> None:
        if capacity < 1:
            raise ValueError("cache capacity must be positive")
        self.capacity = capacity
        self.ttl_s = ttl_s
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Session]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _live(self, session_id: str) -> Optional[Session]:
        # Caller holds self._lock. A hit refreshes both recency and idle time.
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        touched_at, session = entry
        now = self._clock()
        if now - touched_at > self.ttl_s:
            del self._entries[session_id]
            return None
        self._entries[session_id] = (now, session)
        self._entries.move_to_end(session_id)
        return session

    def _store(self, session: Session) -> None:
        self._entries[session.session_id] = (self._clock(), session.model_copy(deep=True))
        self._entries.move_to_end(session.session_id)
        while len(self._entries) > self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted session %s from cache", evicted)

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            session = self._live(session_id)
            return session.model_copy(deep=True) if session is not None else None

    def put(self, session: Session) -> None:
        with self._lock:
            self._store(session)

    def put_if_absent(self, session: Session) -> Session:
        """Cache ``session`` unless a live entry exists; return whichever copy is cached."""

        with self._lock:
            current = self._live(session.session_id)
            if current is None:
                self._store(session)
                current = session
            return current.model_copy(deep=True)

    def update(self, session_id: str, fields: dict[str, Any]) -> bool:
        with self._lock:
            session = self._live(session_id)
            if session is None:
                return False
            self._entries[session_id] = (self._clock(), session.model_copy(update=fields, deep=True))
            return True

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._entries.pop(session_id, None)


class SessionStore:
    """Single logical view over the cache and the durable session table."""

    def __init__(self, cache: Optional[SessionCache] = None) -> None:
        self.cache = cache if cache is not None else SessionCache()

    def create(self, session: Session) -> None:
        try:
            session_rows.insert_session(**session.to_row())
        except sqlite3.Error as exc:
            logger.exception("Durable insert failed for session %s", session.session_id)
            raise DurableStoreError("Unable to persist interview session", session_id=session.session_id, phase="create") from exc
        self.cache.put(session)

    def get(self, session_id: str) -> Optional[Session]:
        cached = self.cache.get(session_id)
        if cached is not None:
            return cached
        row = self._fetch(session_id, "get")
        if row is None:
            return None
        # A writer may have cached a newer version while this row was read.
        session = self.cache.put_if_absent(Session.from_row(row))
        logger.debug("Hydrated session %s from durable store", session_id)
        return session

    def update(self, session_id: str, **fields: Any) -> bool:
        """Apply ``fields`` to both layers; returns whether the durable write landed.

        While the session is cached the cache stays authoritative and a failed
        durable write is only logged. Without a cached copy the durable row is
        the only one, so its failure raises :class:`DurableStoreError`.
        """

        cached = self.cache.update(session_id, fields)
        try:
            matched = session_rows.update_session_fields(session_id, row_fields(fields))
        except sqlite3.Error as exc:
            logger.warning("Durable update failed for session %s: %s", session_id, exc)
            log_event("store_write_failed", session_id, level=logging.WARNING, phase="update", error=str(exc))
            if not cached:
                raise DurableStoreError("Unable to update interview session", session_id=session_id, phase="update") from exc
            return False
        if not matched:
            logger.warning("Durable update matched no row for session %s", session_id)
            log_event("store_write_failed", session_id, level=logging.WARNING, phase="update", error="row missing")
            return False
        if not cached:
            row = self._fetch(session_id, "update")
            if row is not None:
                # Replaces any copy a concurrent reader cached from the old row.
                self.cache.put(Session.from_row(row))
        return True

    def _fetch(self, session_id: str, phase: str) -> Optional[dict]:
        try:
            return session_rows.fetch_session(session_id)
        except sqlite3.Error as exc:
            logger.exception("Durable read failed for session %s", session_id)
            raise DurableStoreError("Unable to load interview session", session_id=session_id, phase=phase) from exc


__all__ = ["SessionCache", "SessionStore"]

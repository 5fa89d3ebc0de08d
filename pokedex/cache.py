"""A thread-safe, time-expiring cache of byte payloads keyed by string."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    value: bytes
    created_at: float = field(default_factory=time.monotonic)


class Cache:
    """Stores byte values and drops them once they are older than ``interval`` seconds.

    A background daemon thread sweeps expired entries every ``interval`` seconds.
    """

    def __init__(self, interval: float) -> None:
        interval = float(interval)
        if interval <= 0:
            raise ValueError("cache interval must be positive")
        self._interval = interval
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._reap_loop, name="cache-reaper", daemon=True
        )
        self._thread.start()

    @property
    def interval(self) -> float:
        """Maximum age of an entry, in seconds, and the sweep period."""
        return self._interval

    @property
    def closed(self) -> bool:
        return self._stop.is_set()

    def add(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any earlier entry."""
        with self._lock:
            self._entries[key] = _Entry(bytes(value))

    def get(self, key: str) -> bytes | None:
        """Return the value stored under ``key``, or None if there is none."""
        with self._lock:
            entry = self._entries.get(key)
        return None if entry is None else entry.value

    def reap(self) -> list[str]:
        """Remove every entry older than the interval and return the removed keys."""
        now = time.monotonic()
        with self._lock:
            expired = [
                key
                for key, entry in self._entries.items()
                if now - entry.created_at > self._interval
            ]
            for key in expired:
                del self._entries[key]
        for key in expired:
            logger.debug("Deleting from cache item with key: %s", key)
        return expired

    def close(self) -> None:
        """Stop the background sweeper. Entries already stored stay readable."""
        self._stop.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    def _reap_loop(self) -> None:
        self.reap()
        while not self._stop.wait(self._interval):
            self.reap()

    def __enter__(self) -> Cache:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
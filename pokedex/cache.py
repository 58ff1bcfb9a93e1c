"""A small thread-safe byte cache whose entries expire after a fixed interval."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta


@dataclass
class _Entry:
    value: bytes
    created_at: float = field(default_factory=time.monotonic)


class Cache:
    """Map of keys to bytes, reaped in the background.

    Every ``interval`` seconds a background thread removes the entries
    older than ``interval``.
    """

    def __init__(self, interval: float | timedelta) -> None:
        if isinstance(interval, timedelta):
            interval = interval.total_seconds()
        if interval <= 0:
            raise ValueError("cache interval must be positive")
        self._interval = float(interval)
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._reaper = threading.Thread(
            target=self._reap_loop, name="cache-reaper", daemon=True
        )
        self._reaper.start()

    @property
    def interval(self) -> float:
        """Seconds between reaps and the age at which entries expire."""
        return self._interval

    def add(self, key: str, val: bytes) -> None:
        """Store ``val`` under ``key``, replacing any earlier entry."""
        with self._lock:
            self._entries[key] = _Entry(bytes(val))

    def get(self, key: str) -> bytes | None:
        """Return the bytes stored under ``key``, or None if absent."""
        with self._lock:
            entry = self._entries.get(key)
        return None if entry is None else entry.value

    def close(self) -> None:
        """Stop the background reaper."""
        self._stop.set()
        if self._reaper is not threading.current_thread():
            self._reaper.join()

    def __enter__(self) -> Cache:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _reap_loop(self) -> None:
        while not self._stop.wait(self._interval):
            self._reap()

    def _reap(self) -> None:
        now = time.monotonic()
        with self._lock:
            expired = [
                key
                for key, entry in self._entries.items()
                if now - entry.created_at > self._interval
            ]
            for key in expired:
                del self._entries[key]
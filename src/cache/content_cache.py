# src/cache/content_cache.py — v1
"""In-process, time-expiring store of original content keyed by random ids.

Ids are uuid4 values, never derived from content, so identical content
stored twice gets independent ids and independent expiry clocks.

Expiry: an entry is live for ``[timestamp, timestamp + max_age)``. ``get``
checks lazily and is the correctness guarantee; a background sweep every
``max_age`` seconds only bounds memory.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable

from mcpsummarizer.cache.models import CacheEntry

logger = logging.getLogger(__name__)


class ContentCache:
    """Thread-safe id → CacheEntry map with periodic sweep."""

    def __init__(
        self,
        max_age: float,
        clock: Callable[[], float] = time.monotonic,
        sweep: bool = True,
    ) -> None:
        """
        Args:
            max_age: Retention window in seconds, strictly positive.
            clock: Monotonic time source (injectable for tests).
            sweep: Start the background sweep thread.

        Raises:
            ValueError: If max_age is not strictly positive. No thread is
                started in that case.
        """
        if max_age <= 0:
            raise ValueError("Cache max age must be a positive number")

        self._max_age = max_age
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

        if sweep:
            self._thread = threading.Thread(
                target=self._sweep_loop, name="content-cache-sweep", daemon=True,
            )
            self._thread.start()

    @property
    def max_age(self) -> float:
        return self._max_age

    @property
    def closed(self) -> bool:
        return self._stop.is_set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def store(self, content: str) -> str:
        """Store content and return its fresh identifier."""
        entry_id = str(uuid.uuid4())
        entry = CacheEntry(content=content, timestamp=self._clock())
        with self._lock:
            self._entries[entry_id] = entry
        logger.debug("Stored content %s (%d chars)", entry_id, len(content))
        return entry_id

    def get(self, entry_id: str) -> str | None:
        """Return stored content, or None if unknown or expired.

        An expired entry is deleted as a side effect.
        """
        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                return None
            if self._is_expired(entry, self._clock()):
                del self._entries[entry_id]
                logger.debug("Content %s expired on read", entry_id)
                return None
            return entry.content

    def sweep(self) -> int:
        """Evict every expired entry. Returns the number evicted."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if self._is_expired(e, now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))
        return len(expired)

    def clear(self) -> int:
        """Remove every entry regardless of age."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def close(self) -> None:
        """Stop the sweep thread and drop all entries.

        Returns only after the sweep thread has exited.
        """
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        self.clear()

    # --- Internal helpers ---

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp >= self._max_age

    def _sweep_loop(self) -> None:
        while not self._stop.wait(self._max_age):
            try:
                self.sweep()
            except Exception:
                logger.exception("Content cache sweep failed")

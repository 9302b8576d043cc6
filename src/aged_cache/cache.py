"""In-memory cache whose entries expire after a per-entry retention time.

A dict maps each key straight to its entry, and the same entries are
chained in a doubly linked list kept sorted by expiration time between
two sentinel nodes. Expired entries therefore always sit together at
the front of the list, so purging them never needs a full scan.

- put() is O(n) worst case: it walks the list to find the sorted slot.
- get() is O(1) on average and never mutates anything.
- size() / is_empty() purge first and cost O(k) for the k entries that
  expired since the last purge.
"""

from __future__ import annotations

import contextlib
import math
import threading
from dataclasses import dataclass
from typing import Any, ContextManager, Dict, Generic, Hashable, Iterator, Optional, TypeVar

from aged_cache import config
from aged_cache.clock import Clock, Millis, SystemClock
from aged_cache.errors import ValidationError
from aged_cache.logging import get_logger

V = TypeVar("V")

logger = get_logger(__name__)


@dataclass(slots=True, eq=False)
class _Entry(Generic[V]):
    # One cached value; also a node of the expiration-ordered list
    key: Optional[Hashable]
    value: Optional[V]
    expires_at: Millis
    prev: Optional["_Entry[V]"] = None
    next: Optional["_Entry[V]"] = None


class AgedCache(Generic[V]):
    """Key/value store where every entry carries its own expiration time.

    An entry counts as expired once ``clock.millis() >= expires_at``;
    get() answers "absent" for it right away, and the next size() or
    is_empty() call drops it from both structures.
    """

    def __init__(self, clock: Optional[Clock] = None, *, thread_safe: Optional[bool] = None) -> None:
        self._clock: Clock = clock if clock is not None else SystemClock()
        self._index: Dict[Hashable, _Entry[V]] = {}

        # Sentinels bound the list and are never indexed or purged
        self._head: _Entry[V] = _Entry(key=None, value=None, expires_at=float("-inf"))
        self._tail: _Entry[V] = _Entry(key=None, value=None, expires_at=float("inf"))
        self._head.next = self._tail
        self._tail.prev = self._head

        if thread_safe is None:
            thread_safe = config.THREAD_SAFE
        # RLock: is_empty() and __len__ re-enter through size()
        self._lock: ContextManager[Any] = threading.RLock() if thread_safe else contextlib.nullcontext()

    @property
    def clock(self) -> Clock:
        return self._clock

    def put(self, key: Hashable, value: V, retention_millis: Millis) -> None:
        self._validate(key, retention_millis)

        with self._lock:
            expires_at = self._clock.millis() + retention_millis
            previous = self._index.get(key)
            if previous is not None:
                # Same key again: the newer entry replaces the old one
                self._unlink(previous)
                logger.debug("Replacing cache entry for %r", key)

            self._insert_sorted(_Entry(key=key, value=value, expires_at=expires_at))

    def get(self, key: Hashable, default: Optional[V] = None) -> Optional[V]:
        with self._lock:
            entry = self._index.get(key)
            if entry is None or self._is_expired(entry, self._clock.millis()):
                return default
            return entry.value

    def size(self) -> int:
        with self._lock:
            self._remove_expired()
            return len(self._index)

    def is_empty(self) -> bool:
        with self._lock:
            return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._index.get(key)
            return entry is not None and not self._is_expired(entry, self._clock.millis())

    def __repr__(self) -> str:
        # No purge here; the count may include entries that already expired
        return f"{self.__class__.__name__}(entries={len(self._index)}, clock={self._clock!r})"

    # ---- list maintenance ----

    @staticmethod
    def _is_expired(entry: _Entry[V], now: Millis) -> bool:
        return now >= entry.expires_at

    @staticmethod
    def _validate(key: Hashable, retention_millis: Millis) -> None:
        if key is None:
            raise ValidationError("Cache key must not be None")
        if isinstance(retention_millis, bool) or not isinstance(retention_millis, (int, float)):
            raise ValidationError(f"Retention must be a number of milliseconds, got {retention_millis!r}")
        if math.isnan(retention_millis):
            raise ValidationError("Retention must not be NaN")
        if retention_millis < 0:
            raise ValidationError(f"Retention must not be negative, got {retention_millis!r}")

    def _link_after(self, entry: _Entry[V], left: _Entry[V]) -> None:
        right = left.next
        assert right is not None, "cannot link after the tail sentinel"
        entry.prev = left
        entry.next = right
        right.prev = entry
        left.next = entry
        self._index[entry.key] = entry

    def _unlink(self, entry: _Entry[V]) -> None:
        left, right = entry.prev, entry.next
        assert left is not None and right is not None, "entry is not linked"
        left.next = right
        right.prev = left
        entry.prev = entry.next = None
        del self._index[entry.key]

    def _insert_sorted(self, entry: _Entry[V]) -> None:
        # Walk past every entry expiring no later than the new one so that
        # ties keep insertion order
        left = self._head
        current = self._head.next
        while current is not self._tail and current.expires_at <= entry.expires_at:
            left = current
            current = current.next
        self._link_after(entry, left)

    def _remove_expired(self) -> int:
        now = self._clock.millis()
        removed = 0
        current = self._head.next
        while current is not self._tail and self._is_expired(current, now):
            following = current.next
            self._unlink(current)
            removed += 1
            current = following

        if removed:
            logger.debug("Purged %d expired cache entries", removed)
        return removed

    # ---- consistency checks ----

    def _entries(self) -> Iterator[_Entry[V]]:
        current = self._head.next
        while current is not self._tail:
            assert current is not None, "list ends before the tail sentinel"
            yield current
            current = current.next

    def _check_invariants(self) -> None:
        # Any failure here is a bug in the cache, not a caller error
        with self._lock:
            assert self._head.prev is None and self._tail.next is None

            previous = self._head
            seen = 0
            for entry in self._entries():
                assert entry.prev is previous, "back-link mismatch"
                assert previous.expires_at <= entry.expires_at, "list is out of order"
                assert self._index.get(entry.key) is entry, "list entry missing from index"
                previous = entry
                seen += 1

            assert self._tail.prev is previous, "tail back-link mismatch"
            assert seen == len(self._index), "index and list disagree on size"

#!/usr/bin/env python3
"""
Thread-safe in-memory memo tables.

Entries are inserted once and never updated or evicted, so the lock only
guards against concurrent dict mutation. For plain memo tables a lost race
costs a redundant computation, never a corrupted entry.
"""

import threading
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


class MemoCache(Generic[K, V]):
    """Unbounded insert-if-absent cache guarded by a single lock."""

    def __init__(self):
        self._cache: Dict[K, V] = {}
        self._lock = threading.Lock()

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            return self._cache.get(key)

    def __contains__(self, key: K) -> bool:
        with self._lock:
            return key in self._cache

    def put_if_absent(self, key: K, value: V) -> V:
        """Store value unless the key exists; return the stored value."""
        with self._lock:
            return self._cache.setdefault(key, value)

    def get_or_compute(self, key: K, compute: Callable[[], V]) -> V:
        """
        Return the cached value for key, computing and storing it on a miss.

        compute runs outside the lock; if two callers race, the first
        insert wins and both receive it.
        """
        with self._lock:
            if key in self._cache:
                return self._cache[key]
        value = compute()
        return self.put_if_absent(key, value)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._cache)


class BracketCache(MemoCache[Tuple[str, int], str]):
    """Bracket group contents keyed by (format string, opening index)."""

    pass


class SelectionCache(MemoCache[str, int]):
    """
    Chosen series id keyed by normalized series name. 0 means "none".

    Choices come from a user prompt, so a miss is computed while holding
    a second lock: one prompt per name, and never two prompts at once.
    """

    def __init__(self):
        super().__init__()
        self._compute_lock = threading.Lock()

    def get_or_compute(self, key: str, compute: Callable[[], int]) -> int:
        with self._compute_lock:
            with self._lock:
                if key in self._cache:
                    return self._cache[key]
            return self.put_if_absent(key, compute())

    @staticmethod
    def normalize(series_name: str) -> str:
        return series_name.lower().strip()


# Process-wide defaults, handed to components that are not given their own.
default_bracket_cache = BracketCache()
default_selection_cache = SelectionCache()

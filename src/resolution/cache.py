"""Memoization of resolve results keyed by specifier and base path."""

from __future__ import annotations

import threading
from collections.abc import MutableMapping
from typing import Callable, Dict, Iterator, Optional

CacheValue = Optional[str]


class ResolutionCache(MutableMapping):
    """Unbounded mapping of ``specifier + base`` -> result string or None.

    Entries never expire and are never validated against the filesystem.
    Callers may assign entries directly to override resolution; such values
    are returned verbatim. A single lock makes check-then-store atomic.
    """

    def __init__(self, initial: Optional[Dict[str, CacheValue]] = None):
        self._entries: Dict[str, CacheValue] = dict(initial or {})
        self._lock = threading.Lock()

    @staticmethod
    def make_key(specifier: str, base_path: Optional[str]) -> str:
        """Composite key: the raw specifier followed by the raw base path."""
        return specifier + (base_path or "")

    def __getitem__(self, key: str) -> CacheValue:
        return self._entries[key]

    def __setitem__(self, key: str, value: CacheValue) -> None:
        with self._lock:
            self._entries[key] = value

    def __delitem__(self, key: str) -> None:
        with self._lock:
            del self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(self, key: str, compute: Callable[[], CacheValue]) -> CacheValue:
        """Return the cached value for ``key``, computing and storing it on a miss.

        A cached None counts as a hit.
        """
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            value = compute()
            self._entries[key] = value
            return value

    def stats(self) -> Dict[str, int]:
        """Get cache statistics."""
        misses = sum(1 for v in self._entries.values() if v is None)
        return {
            "total_entries": len(self._entries),
            "resolved_entries": len(self._entries) - misses,
            "not_found_entries": misses,
        }

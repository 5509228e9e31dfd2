# utils/cache.py
import threading
from typing import Any, Hashable, Iterable, Optional, Tuple


class ListingCache:
    """Product listing pages keyed by their query parameters.

    Entries never expire on their own: every mutation touching products or
    categories calls ``invalidate()`` before it responds. A page computed
    before an invalidation is never stored after it.
    """

    def __init__(self, max_entries: int = 256):
        self.max_entries = max_entries
        self._entries = {}
        self._generation = 0
        self._lock = threading.Lock()

    @staticmethod
    def key(offset: int, limit: int, category_ids: Optional[Iterable[int]], is_available: Optional[bool]) -> Tuple[Hashable, ...]:
        cats = tuple(sorted(set(category_ids))) if category_ids else ()
        return (offset, limit, cats, is_available)

    @property
    def generation(self) -> int:
        return self._generation

    def get(self, key) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key, value: Any, generation: int) -> bool:
        with self._lock:
            if generation != self._generation:
                return False
            if key not in self._entries and len(self._entries) >= self.max_entries:
                # drop the oldest entry
                self._entries.pop(next(iter(self._entries)))
            self._entries[key] = value
            return True

    def invalidate(self) -> None:
        with self._lock:
            self._generation += 1
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


listing_cache = ListingCache()

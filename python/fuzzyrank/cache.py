"""Process-wide memoization of query and candidate preprocessing.

Both caches are read-through: a miss prepares the string and stores it.
They are bounded LRUs guarded by a lock, so threads can share them; the
cached values themselves are never scored in place.

Warning:
    Strings longer than ``MAX_CACHED_LENGTH`` are prepared on every call and
    never stored, so one-off huge inputs cannot bloat the caches.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, TypeVar

from fuzzyrank.constants import MAX_CACHED_LENGTH, PREPARED_CACHE_SIZE, SEARCH_CACHE_SIZE
from fuzzyrank.models import Prepared
from fuzzyrank.prepare import prepare_search, prepare_target

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class PreparedCache(Generic[K, V]):
    """Thread-safe LRU mapping with a read-through ``get_or_create``."""

    def __init__(self, maxsize: int):
        if maxsize <= 0:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self.maxsize = maxsize
        self._data: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, key: K, factory: Callable[[K], V]) -> V:
        with self._lock:
            try:
                value = self._data[key]
            except KeyError:
                pass
            else:
                self._data.move_to_end(key)
                return value

        # Prepare outside the lock; a racing thread may do the same work
        value = factory(key)
        with self._lock:
            existing = self._data.get(key)
            if existing is not None:
                self._data.move_to_end(key)
                return existing
            self._data[key] = value
            if len(self._data) > self.maxsize:
                self._data.popitem(last=False)
        return value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


_prepared_cache: PreparedCache[str, Optional[Prepared]] = PreparedCache(PREPARED_CACHE_SIZE)
_search_cache: PreparedCache[str, Optional[tuple[int, ...]]] = PreparedCache(SEARCH_CACHE_SIZE)


def get_prepared(target: str) -> Optional[Prepared]:
    """Prepared form of ``target``, from the cache when possible."""
    if len(target) > MAX_CACHED_LENGTH:
        logger.debug("Not caching target of length %d", len(target))
        return prepare_target(target)
    return _prepared_cache.get_or_create(target, prepare_target)


def get_prepared_search(search: str) -> Optional[tuple[int, ...]]:
    """Folded codes of ``search``, from the cache when possible."""
    if len(search) > MAX_CACHED_LENGTH:
        logger.debug("Not caching query of length %d", len(search))
        return prepare_search(search)
    return _search_cache.get_or_create(search, prepare_search)


def cache_info() -> dict[str, int]:
    """Current number of entries in each cache."""
    return {"prepared": len(_prepared_cache), "search": len(_search_cache)}


def cleanup() -> None:
    """Drop every cached query and candidate."""
    logger.debug(
        "Clearing caches (%d prepared, %d search entries)",
        len(_prepared_cache),
        len(_search_cache),
    )
    _prepared_cache.clear()
    _search_cache.clear()


__all__ = ["PreparedCache", "get_prepared", "get_prepared_search", "cache_info", "cleanup"]

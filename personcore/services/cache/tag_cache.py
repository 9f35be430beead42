# personcore/services/cache/tag_cache.py
from __future__ import annotations

import copy
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, TypeVar

from personcore.common.logging import get_logger
from personcore.common.settings import get_settings
from personcore.domain.errors import CacheError
from personcore.domain.ports.cache import CacheBackendPort

T = TypeVar("T")

log = get_logger(__name__)

_TAG_PREFIX = "__tag__:"
_ENTRY_PREFIX = "entry:"


class MemoryCacheBackend:
    """
    Process-local CacheBackendPort with per-entry TTL and LRU eviction.
    Values are deep-copied in and out so callers never share cached objects.
    """

    def __init__(self, max_entries: int = 4096, clock: Callable[[], float] = time.monotonic) -> None:
        self.max_entries = max(1, int(max_entries))
        self._clock = clock
        self._data: "OrderedDict[str, Tuple[Any, Optional[float]]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            value, expires_at = item
            if expires_at is not None and expires_at <= self._clock():
                del self._data[key]
                return None
            self._data.move_to_end(key)
        return copy.deepcopy(value)

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        expires_at = None if ttl is None else self._clock() + float(ttl)
        stored = copy.deepcopy(value)
        with self._lock:
            self._data[key] = (stored, expires_at)
            self._data.move_to_end(key)
            while len(self._data) > self.max_entries:
                self._data.popitem(last=False)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


@dataclass(frozen=True)
class _Entry:
    value: Any
    tag_versions: Dict[str, str]


class TagCache:
    """
    Tag-scoped read cache.

    Every tag has an opaque version token stored in the backend. An entry
    remembers the tokens of its tags as they were *before* its value was
    computed, and is served only while all of them still match. Busting a tag
    just replaces its token, so it never waits on readers, and a value computed
    across an invalidation is never served after it.

    Backend failures surface as CacheError, which is logged and swallowed:
    the read falls back to computing the value.
    """

    def __init__(self, backend: Optional[CacheBackendPort] = None, *, enabled: bool = True) -> None:
        self.backend: CacheBackendPort = backend if backend is not None else MemoryCacheBackend()
        self.enabled = enabled

    # ---------------- public ----------------

    def get_or_compute(
        self,
        key: str,
        tags: Iterable[str],
        ttl: Optional[float],
        compute: Callable[[], T],
        *,
        store_none: bool = True,
    ) -> T:
        """
        Return the cached value for `key`, or compute and (best-effort) store it.
        ttl=None: no expiry. store_none=False leaves None results uncached.
        """
        if not self.enabled:
            return compute()

        tags = tuple(tags)
        versions: Optional[Dict[str, str]] = None
        try:
            versions = self._snapshot(tags)
            entry = self.backend.get(_ENTRY_PREFIX + key)
            if isinstance(entry, _Entry) and entry.tag_versions == versions:
                return entry.value
        except Exception as ex:
            self._swallow("lookup", key, ex)

        value = compute()

        if versions is not None and (store_none or value is not None):
            try:
                self.backend.set(_ENTRY_PREFIX + key, _Entry(value=value, tag_versions=versions), ttl)
            except Exception as ex:
                self._swallow("populate", key, ex)
        return value

    def invalidate_tags(self, *tags: str) -> None:
        for tag in tags:
            try:
                self.backend.set(_TAG_PREFIX + tag, self._new_token())
            except Exception as ex:
                self._swallow("invalidate", tag, ex)

    def forget(self, key: str) -> None:
        try:
            self.backend.delete(_ENTRY_PREFIX + key)
        except Exception as ex:
            self._swallow("forget", key, ex)

    def flush(self) -> None:
        try:
            self.backend.clear()
        except Exception as ex:
            self._swallow("flush", "*", ex)

    # ---------------- internals ----------------

    @staticmethod
    def _new_token() -> str:
        return secrets.token_hex(8)

    def _snapshot(self, tags: Tuple[str, ...]) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for tag in tags:
            token = self.backend.get(_TAG_PREFIX + tag)
            if token is None:
                # unseen (or evicted) tag: anything cached under it is unknown, start fresh
                token = self._new_token()
                self.backend.set(_TAG_PREFIX + tag, token)
            out[tag] = token
        return out

    @staticmethod
    def _swallow(op: str, key: str, ex: Exception) -> None:
        err = ex if isinstance(ex, CacheError) else CacheError(f"cache {op} failed for {key!r}: {ex}")
        log.warning("%s", err)


@lru_cache(maxsize=1)
def get_cache() -> TagCache:
    """Process-wide cache built from settings."""
    cfg = get_settings().cache
    return TagCache(MemoryCacheBackend(max_entries=cfg.max_entries), enabled=cfg.enabled)

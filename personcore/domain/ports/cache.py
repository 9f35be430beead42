from __future__ import annotations
from typing import Any, Optional, Protocol

class CacheBackendPort(Protocol):
    # get() returns None on a miss; entries are opaque to the backend
    def get(self, key: str) -> Optional[Any]: ...
    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None: ...
    def delete(self, key: str) -> None: ...
    def clear(self) -> None: ...

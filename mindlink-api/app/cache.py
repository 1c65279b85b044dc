"""
In-process TTL cache for extracted page metadata.
"""
import time
from typing import Callable, Optional

from cachetools import TTLCache

from app.schemas.metadata import InstagramMetadata


class MetadataCache:
    """Metadata records keyed by the exact request URL.

    Keys are stored as given; ``https://x/p/A`` and ``https://x/p/A?utm=1``
    are distinct entries. Expired entries are swept by ``TTLCache`` itself.
    """

    def __init__(
        self,
        ttl_seconds: int = 3600,
        max_entries: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: TTLCache[str, InstagramMetadata] = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer
        )

    def get(self, key: str) -> Optional[InstagramMetadata]:
        return self._entries.get(key)

    def set(self, key: str, value: InstagramMetadata) -> None:
        self._entries[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from coders_dungeon.schemas.repo import RepoEntry


def cache_key(owner: str, repo: str, path: str = "") -> str:
    return f"{owner}/{repo}:{path}" if path else f"{owner}/{repo}"


@dataclass(frozen=True)
class CacheRecord:
    key: str
    payload: List[RepoEntry]
    fetched_at: float


class ContentCache:
    """
    Flat TTL cache for normalized contents listings.

    Expiry is lazy: a stale record stays in the dict until the next fetch of
    the same key overwrites it, but get() treats it as absent.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl_seconds
        self._clock = clock
        self._records: Dict[str, CacheRecord] = {}

    def get(self, key: str) -> Optional[List[RepoEntry]]:
        rec = self._records.get(key)
        if rec is None:
            return None
        if self._clock() - rec.fetched_at >= self.ttl:
            return None
        return rec.payload

    def set(self, key: str, payload: List[RepoEntry]) -> CacheRecord:
        rec = CacheRecord(key=key, payload=list(payload), fetched_at=self._clock())
        self._records[key] = rec
        return rec

    def __len__(self) -> int:
        return len(self._records)

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Union

import httpx
from loguru import logger

from coders_dungeon.core.config import settings
from coders_dungeon.core.errors import RemoteFetchError
from coders_dungeon.schemas.repo import FileEntry, RepoEntry, parse_entries
from coders_dungeon.services.github.cache import ContentCache, cache_key
from coders_dungeon.services.github.client import GitHubAPIError, GitHubClient
from coders_dungeon.utils.repo_ref import normalize_path


class RepoContentsService:
    """
    Cached view over the GitHub contents API.

    Concurrent misses for the same key share a single in-flight request.
    Failures are never cached.
    """

    def __init__(self, client: Optional[GitHubClient] = None, cache: Optional[ContentCache] = None) -> None:
        self.client = client or GitHubClient()
        # an empty ContentCache is falsy
        self.cache = cache if cache is not None else ContentCache(ttl_seconds=settings.CACHE_TTL_SECONDS)
        self._inflight: Dict[str, asyncio.Task] = {}

    async def fetch_contents(self, owner: str, repo: str, path: str = "") -> List[RepoEntry]:
        path = normalize_path(path)
        key = cache_key(owner, repo, path)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("cache hit {}", key)
            return list(cached)

        task = self._inflight.get(key)
        if task is None:
            logger.debug("cache miss {}", key)
            task = asyncio.ensure_future(self._fetch_remote(key, owner, repo, path))
            self._inflight[key] = task
            task.add_done_callback(lambda _t, k=key: self._inflight.pop(k, None))

        return list(await asyncio.shield(task))

    async def _fetch_remote(self, key: str, owner: str, repo: str, path: str) -> List[RepoEntry]:
        try:
            raw = await self.client.get_contents(owner, repo, path)
        except (GitHubAPIError, httpx.HTTPError) as e:
            logger.error(f"Error fetching repo contents {key}: {e}")
            raise RemoteFetchError(f"Failed to fetch repository contents: {e}") from e

        entries = parse_entries(raw)
        self.cache.set(key, entries)
        return entries

    async def fetch_node(self, owner: str, repo: str, path: str) -> Union[FileEntry, List[RepoEntry]]:
        """A FileEntry when `path` names a file, otherwise the directory listing."""
        path = normalize_path(path)
        entries = await self.fetch_contents(owner, repo, path)
        if path and len(entries) == 1:
            only = entries[0]
            if isinstance(only, FileEntry) and only.path.strip("/") == path:
                return only
        return entries

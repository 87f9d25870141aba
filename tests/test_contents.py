"""Tests for the cached contents service."""

import asyncio

import httpx
import pytest

from coders_dungeon.core.errors import RemoteFetchError
from coders_dungeon.schemas.repo import DirEntry, FileEntry
from coders_dungeon.services.github.cache import ContentCache, cache_key
from coders_dungeon.services.github.client import GitHubAPIError
from coders_dungeon.services.github.contents import RepoContentsService


class TestContentCache:
    def test_key_format(self):
        assert cache_key("octocat", "hello-world") == "octocat/hello-world"
        assert cache_key("octocat", "hello-world", "docs") == "octocat/hello-world:docs"

    def test_record_expires_lazily(self, clock):
        cache = ContentCache(ttl_seconds=60, clock=clock)
        cache.set("k", [])
        clock.now += 59
        assert cache.get("k") == []
        clock.now += 1
        assert cache.get("k") is None
        # still stored until overwritten
        assert len(cache) == 1

    def test_missing_key(self, clock):
        assert ContentCache(ttl_seconds=60, clock=clock).get("nope") is None


class TestFetchContents:
    def test_injected_empty_cache_is_kept(self, github, clock):
        cache = ContentCache(ttl_seconds=60, clock=clock)
        service = RepoContentsService(client=github, cache=cache)

        assert service.cache is cache

    @pytest.mark.asyncio
    async def test_second_fetch_within_ttl_is_served_from_cache(self, contents, github):
        first = await contents.fetch_contents("octocat", "hello-world", "docs")
        second = await contents.fetch_contents("octocat", "hello-world", "docs")

        assert first == second
        assert github.calls == [("octocat", "hello-world", "docs")]

    @pytest.mark.asyncio
    async def test_fetch_after_ttl_calls_remote_once_more(self, contents, github, clock):
        await contents.fetch_contents("octocat", "hello-world")
        clock.now += 30 * 60
        await contents.fetch_contents("octocat", "hello-world")
        await contents.fetch_contents("octocat", "hello-world")

        assert len(github.calls) == 2

    @pytest.mark.asyncio
    async def test_single_file_is_normalized_to_list(self, contents):
        result = await contents.fetch_contents("octocat", "hello-world", "README.md")

        assert isinstance(result, list)
        assert len(result) == 1
        assert isinstance(result[0], FileEntry)
        assert result[0].content

    @pytest.mark.asyncio
    async def test_listing_entries_are_typed(self, contents):
        result = await contents.fetch_contents("octocat", "hello-world")
        assert [type(e) for e in result] == [FileEntry, DirEntry, DirEntry]

    @pytest.mark.asyncio
    async def test_failure_raises_and_is_not_cached(self, contents, github):
        with pytest.raises(RemoteFetchError, match="Failed to fetch repository contents: Not Found"):
            await contents.fetch_contents("octocat", "hello-world", "missing")
        with pytest.raises(RemoteFetchError):
            await contents.fetch_contents("octocat", "hello-world", "missing")

        assert len(github.calls) == 2
        assert len(contents.cache) == 0

    @pytest.mark.asyncio
    async def test_network_errors_are_wrapped(self, contents, github):
        github.fail_with = httpx.ConnectError("connection refused")
        with pytest.raises(RemoteFetchError, match="connection refused"):
            await contents.fetch_contents("octocat", "hello-world")

    @pytest.mark.asyncio
    async def test_concurrent_misses_share_one_remote_call(self, fake_fs):
        gate = asyncio.Event()

        class SlowClient:
            calls = 0

            async def get_contents(self, owner, repo, path=""):
                SlowClient.calls += 1
                await gate.wait()
                return fake_fs[path]

        service = RepoContentsService(client=SlowClient(), cache=ContentCache(ttl_seconds=60))
        tasks = [asyncio.ensure_future(service.fetch_contents("octocat", "hello-world", "docs")) for _ in range(5)]
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(*tasks)

        assert SlowClient.calls == 1
        assert all(r == results[0] for r in results)
        assert service._inflight == {}

    @pytest.mark.asyncio
    async def test_concurrent_waiters_all_see_the_failure(self):
        gate = asyncio.Event()

        class FailingClient:
            calls = 0

            async def get_contents(self, owner, repo, path=""):
                FailingClient.calls += 1
                await gate.wait()
                raise GitHubAPIError("boom")

        service = RepoContentsService(client=FailingClient(), cache=ContentCache(ttl_seconds=60))
        tasks = [asyncio.ensure_future(service.fetch_contents("o", "r")) for _ in range(3)]
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert FailingClient.calls == 1
        assert all(isinstance(r, RemoteFetchError) for r in results)


class TestFetchNode:
    @pytest.mark.asyncio
    async def test_file_path_gives_file_entry(self, contents):
        node = await contents.fetch_node("octocat", "hello-world", "docs/README.md")
        assert isinstance(node, FileEntry)
        assert node.path == "docs/README.md"

    @pytest.mark.asyncio
    async def test_directory_with_single_file_is_still_a_listing(self, contents):
        node = await contents.fetch_node("octocat", "hello-world", "docs/guide")
        assert isinstance(node, list)
        assert node[0].path == "docs/guide/intro.md"

    @pytest.mark.asyncio
    async def test_leading_slash_is_ignored(self, contents, github):
        node = await contents.fetch_node("octocat", "hello-world", "/docs/")
        assert isinstance(node, list)
        assert github.calls == [("octocat", "hello-world", "docs")]

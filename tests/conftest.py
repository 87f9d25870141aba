"""Shared fixtures: an in-memory GitHub repository and apps built around it."""

from __future__ import annotations

import base64
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from coders_dungeon.main import create_app
from coders_dungeon.services.describe import DescriptionService
from coders_dungeon.services.github.cache import ContentCache
from coders_dungeon.services.github.client import GitHubAPIError
from coders_dungeon.services.github.contents import RepoContentsService


def _file(path: str, text: str) -> Dict[str, Any]:
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    # GitHub wraps base64 bodies at 60 characters
    wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
    return {
        "name": path.rsplit("/", 1)[-1],
        "path": path,
        "type": "file",
        "size": len(text),
        "sha": f"sha-{path}",
        "encoding": "base64",
        "content": wrapped,
    }


def _listing_item(raw: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in raw.items() if k not in ("content", "encoding")}


def _dir(path: str) -> Dict[str, Any]:
    return {"name": path.rsplit("/", 1)[-1], "path": path, "type": "dir", "size": 0, "sha": f"sha-{path}"}


README = "# Hello World\nMy first repository on GitHub.\n"
DOCS_README = "# Docs\nHow to use hello-world.\n"
BUTTON = "def click():\n    return 'clicked'\n" * 60


def build_fake_fs() -> Dict[str, Any]:
    """path -> what GitHub's contents API would answer for it."""
    files = {
        "README.md": _file("README.md", README),
        "docs/README.md": _file("docs/README.md", DOCS_README),
        "docs/guide/intro.md": _file("docs/guide/intro.md", "Welcome, traveller.\n"),
        "src/components/Button.py": _file("src/components/Button.py", BUTTON),
    }
    fs: Dict[str, Any] = {
        "": [_listing_item(files["README.md"]), _dir("docs"), _dir("src")],
        "docs": [_listing_item(files["docs/README.md"]), _dir("docs/guide")],
        "docs/guide": [_listing_item(files["docs/guide/intro.md"])],
        "src": [_dir("src/components")],
        "src/components": [_listing_item(files["src/components/Button.py"])],
    }
    fs.update(files)
    return fs


class FakeGitHubClient:
    def __init__(self, fs: Dict[str, Any]) -> None:
        self.fs = fs
        self.calls: List[tuple] = []
        self.fail_with: Exception | None = None

    async def get_contents(self, owner: str, repo: str, path: str = "") -> Any:
        self.calls.append((owner, repo, path))
        if self.fail_with is not None:
            raise self.fail_with
        if (owner, repo) != ("octocat", "hello-world") or path not in self.fs:
            raise GitHubAPIError("Not Found (status=404)", status_code=404)
        return self.fs[path]


class FakeLLM:
    def __init__(self, answer: str = "A glowing tome of greetings.") -> None:
        self.answer = answer
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answer


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def fake_fs() -> Dict[str, Any]:
    return build_fake_fs()


@pytest.fixture()
def github(fake_fs: Dict[str, Any]) -> FakeGitHubClient:
    return FakeGitHubClient(fake_fs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def contents(github: FakeGitHubClient, clock: FakeClock) -> RepoContentsService:
    return RepoContentsService(client=github, cache=ContentCache(ttl_seconds=30 * 60, clock=clock))


@pytest.fixture()
def llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture()
def describer(llm: FakeLLM) -> DescriptionService:
    return DescriptionService(llm_factory=lambda: llm)


@pytest.fixture()
def api_client(contents: RepoContentsService, describer: DescriptionService) -> TestClient:
    return TestClient(create_app(contents=contents, describer=describer))

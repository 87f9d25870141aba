from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from coders_dungeon.core.config import settings


class GitHubAPIError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class GitHubRateLimit:
    remaining: Optional[int]
    reset_epoch: Optional[int]


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        base: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base = (base or settings.GITHUB_API_BASE).rstrip("/")
        self.token = token or settings.GITHUB_TOKEN
        self.timeout = timeout or settings.GITHUB_TIMEOUT_SECONDS

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "coders-dungeon/0.1",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _rate_limit(self, resp: httpx.Response) -> GitHubRateLimit:
        def _to_int(v: Optional[str]) -> Optional[int]:
            try:
                return int(v) if v is not None else None
            except ValueError:
                return None

        remaining = _to_int(resp.headers.get("x-ratelimit-remaining"))
        reset = _to_int(resp.headers.get("x-ratelimit-reset"))
        return GitHubRateLimit(remaining=remaining, reset_epoch=reset)

    @staticmethod
    def _message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text[:300]
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return resp.text[:300]

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base}{path}"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(url, headers=self._headers(), params=params)

        if resp.status_code in (403, 429):
            rl = self._rate_limit(resp)
            raise GitHubAPIError(
                f"GitHub rate limit or forbidden. status={resp.status_code} "
                f"remaining={rl.remaining} reset={rl.reset_epoch} message={self._message(resp)}",
                status_code=resp.status_code,
            )

        if resp.status_code >= 400:
            raise GitHubAPIError(
                f"{self._message(resp)} (status={resp.status_code})",
                status_code=resp.status_code,
            )

        return resp.json()

    async def get_contents(self, owner: str, repo: str, path: str = "") -> Any:
        # object for a file, array for a directory
        route = f"/repos/{quote(owner)}/{quote(repo)}/contents"
        if path:
            route += "/" + quote(path, safe="/")
        return await self._get(route)

    @staticmethod
    def decode_content(entry: Dict[str, Any]) -> bytes:
        # GitHub returns base64 with newlines
        enc = entry.get("encoding")
        content = entry.get("content") or ""
        if enc != "base64":
            return content.encode("utf-8", errors="ignore")
        content = content.replace("\n", "")
        return base64.b64decode(content)

    @classmethod
    def decode_text(cls, entry: Dict[str, Any]) -> str:
        return cls.decode_content(entry).decode("utf-8", errors="replace")

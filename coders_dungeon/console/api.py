from __future__ import annotations

from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import httpx

from coders_dungeon.core.config import settings
from coders_dungeon.schemas.repo import FileRecord, RepoEntry, parse_entries


class DungeonAPIError(Exception):
    pass


class DungeonAPI:
    """Blocking client for the dungeon backend, used by the console."""

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.Client] = None, timeout: float = 120.0):
        self.client = client or httpx.Client(base_url=(base_url or settings.API_BASE_URL).rstrip("/"), timeout=timeout)

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            r = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise DungeonAPIError(str(e)) from e

        try:
            data = r.json()
        except ValueError:
            data = None

        if r.status_code >= 400:
            if isinstance(data, dict) and data.get("error"):
                raise DungeonAPIError(str(data["error"]))
            raise DungeonAPIError(f"Request failed with status {r.status_code}")
        return data

    def get_root(self, owner: str, repo: str) -> List[RepoEntry]:
        return parse_entries(self._request("GET", f"/api/repo/{quote(owner)}/{quote(repo)}"))

    def get_path(
        self, owner: str, repo: str, path: str, describe: bool = True
    ) -> Union[FileRecord, List[RepoEntry]]:
        if not path:
            return self.get_root(owner, repo)
        params = None if describe else {"describe": "false"}
        data = self._request("GET", f"/api/file/{quote(owner)}/{quote(repo)}/{quote(path, safe='/')}", params=params)
        if isinstance(data, list):
            return parse_entries(data)
        return FileRecord.model_validate(data)

    def get_structure(self, owner: str, repo: str) -> str:
        data = self._request("GET", f"/api/repo/{quote(owner)}/{quote(repo)}/structure")
        return data["tree"]

    def describe(self, code: str, type: str = "snippet", file_name: Optional[str] = None) -> str:
        body: Dict[str, Any] = {"code": code, "type": type, "fileName": file_name}
        data = self._request("POST", "/api/ai/describe", json=body)
        return data["description"]

import re
from urllib.parse import urlparse

from coders_dungeon.core.errors import InvalidRepoRefError

_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")


def parse_owner_repo(raw: str) -> tuple[str, str]:
    """
    Accepts "owner/repo" or a GitHub URL:
    - strips scheme, host, trailing '/' and '.git'
    - keeps only the first two path segments
    """
    s = (raw or "").strip()

    if "://" in s or s.lower().startswith("github.com/"):
        if "://" not in s:
            s = "https://" + s
        s = urlparse(s).path or ""

    s = s.rstrip("/")
    if s.endswith(".git"):
        s = s[:-4]

    parts = [p for p in s.split("/") if p]
    if len(parts) < 2:
        raise InvalidRepoRefError(
            "Please provide a valid GitHub repository path (e.g., facebook/react)"
        )
    owner, repo = parts[0], parts[1]
    validate_owner_repo(owner, repo)
    return owner, repo


def validate_owner_repo(owner: str, repo: str) -> None:
    for label, value in (("owner", owner), ("repo", repo)):
        if not value or not _NAME.match(value) or value in (".", ".."):
            raise InvalidRepoRefError(f"Invalid repository {label}: {value!r}")


def normalize_path(path: str) -> str:
    p = (path or "").strip().strip("/")
    if any(seg in (".", "..") for seg in p.split("/")):
        raise InvalidRepoRefError(f"Invalid repository path: {path!r}")
    return p


def join_path(base: str, name: str) -> str:
    return f"{base}/{name}" if base else name

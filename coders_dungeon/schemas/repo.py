from __future__ import annotations

from typing import Any, Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Entry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    path: str
    size: Optional[int] = None
    sha: Optional[str] = None
    html_url: Optional[str] = None


class FileEntry(_Entry):
    type: Literal["file"] = "file"
    content: Optional[str] = None
    encoding: Optional[str] = None
    download_url: Optional[str] = None


class DirEntry(_Entry):
    type: Literal["dir"] = "dir"


RepoEntry = Annotated[Union[FileEntry, DirEntry], Field(discriminator="type")]

_entries = TypeAdapter(List[RepoEntry])


def parse_entries(raw: Any) -> List[RepoEntry]:
    """
    Normalize a GitHub contents payload to a list of entries:
    - a single object becomes a one-element list
    - anything that is not a directory (symlink, submodule) is a file
    """
    items = raw if isinstance(raw, list) else [raw]
    cleaned: List[Dict[str, Any]] = []
    for it in items:
        it = dict(it)
        if it.get("type") != "dir":
            it["type"] = "file"
        cleaned.append(it)
    return _entries.validate_python(cleaned)


def dump_entries(entries: List[RepoEntry]) -> List[Dict[str, Any]]:
    return [e.model_dump(mode="json") for e in entries]


class FileRecord(FileEntry):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    ai_description: Optional[str] = Field(default=None, alias="aiDescription")
    decoded_content: str = Field(alias="decodedContent")


class StructureOut(BaseModel):
    tree: str

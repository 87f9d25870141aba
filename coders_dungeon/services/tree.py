from __future__ import annotations

from typing import Dict, List, Optional

from coders_dungeon.core.config import settings
from coders_dungeon.core.errors import TreeLimitError
from coders_dungeon.schemas.repo import DirEntry
from coders_dungeon.services.github.contents import RepoContentsService

DirectoryTree = Dict[str, Optional["DirectoryTree"]]


class _Budget:
    def __init__(self, max_nodes: int) -> None:
        self.max_nodes = max_nodes
        self.nodes = 0

    def take(self) -> None:
        self.nodes += 1
        if self.nodes > self.max_nodes:
            raise TreeLimitError(f"Repository is too large to map (more than {self.max_nodes} entries)")


async def build_tree(
    contents: RepoContentsService,
    owner: str,
    repo: str,
    dir: str = "",
    max_depth: Optional[int] = None,
    max_nodes: Optional[int] = None,
) -> DirectoryTree:
    """
    Walk the repository one listing at a time.
    Files map to None, directories to nested dicts, in listing order.
    Any failed fetch fails the whole map.
    """
    depth_limit = settings.TREE_MAX_DEPTH if max_depth is None else max_depth
    budget = _Budget(settings.TREE_MAX_NODES if max_nodes is None else max_nodes)
    return await _walk(contents, owner, repo, dir, 0, depth_limit, budget)


async def _walk(
    contents: RepoContentsService,
    owner: str,
    repo: str,
    dir: str,
    depth: int,
    max_depth: int,
    budget: _Budget,
) -> DirectoryTree:
    if depth > max_depth:
        raise TreeLimitError(f"Repository is nested too deeply to map (deeper than {max_depth} levels)")

    tree: DirectoryTree = {}
    for item in await contents.fetch_contents(owner, repo, dir):
        budget.take()
        if isinstance(item, DirEntry):
            tree[item.name] = await _walk(contents, owner, repo, item.path, depth + 1, max_depth, budget)
        else:
            tree[item.name] = None
    return tree


def render_tree(tree: DirectoryTree) -> str:
    lines: List[str] = []
    _render(tree, "", lines)
    return "\n".join(lines) + ("\n" if lines else "")


def _render(tree: DirectoryTree, prefix: str, lines: List[str]) -> None:
    names = list(tree)
    for i, name in enumerate(names):
        last = i == len(names) - 1
        lines.append(f"{prefix}{'└─ ' if last else '├─ '}{name}")
        child = tree[name]
        if child:
            _render(child, prefix + ("   " if last else "│  "), lines)

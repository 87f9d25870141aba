from fastapi import APIRouter, Depends

from coders_dungeon.api.deps import error_response, get_contents_service
from coders_dungeon.schemas.repo import StructureOut, dump_entries
from coders_dungeon.services.github.contents import RepoContentsService
from coders_dungeon.services.tree import build_tree, render_tree
from coders_dungeon.utils.repo_ref import validate_owner_repo

router = APIRouter(tags=["repo"])

@router.get("/repo/{owner}/{repo}/structure")
async def repo_structure(owner: str, repo: str, contents: RepoContentsService = Depends(get_contents_service)):
    try:
        validate_owner_repo(owner, repo)
        tree = await build_tree(contents, owner, repo)
        return StructureOut(tree=render_tree(tree))
    except Exception as e:
        return error_response("/api/repo/structure", e)

@router.get("/repo/{owner}/{repo}")
async def repo_root(owner: str, repo: str, contents: RepoContentsService = Depends(get_contents_service)):
    try:
        validate_owner_repo(owner, repo)
        return dump_entries(await contents.fetch_contents(owner, repo))
    except Exception as e:
        return error_response("/api/repo", e)

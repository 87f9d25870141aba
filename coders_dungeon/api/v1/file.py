from fastapi import APIRouter, Depends

from coders_dungeon.api.deps import error_response, get_contents_service, get_description_service
from coders_dungeon.schemas.repo import FileEntry, FileRecord, dump_entries
from coders_dungeon.services.describe import DescriptionKind, DescriptionService
from coders_dungeon.services.github.client import GitHubClient
from coders_dungeon.services.github.contents import RepoContentsService
from coders_dungeon.utils.repo_ref import validate_owner_repo

router = APIRouter(tags=["file"])

@router.get("/file/{owner}/{repo}/{path:path}")
async def repo_file(
    owner: str,
    repo: str,
    path: str,
    describe: bool = True,
    contents: RepoContentsService = Depends(get_contents_service),
    describer: DescriptionService = Depends(get_description_service),
):
    try:
        validate_owner_repo(owner, repo)
        node = await contents.fetch_node(owner, repo, path)
        if not isinstance(node, FileEntry):
            return dump_entries(node)

        decoded = GitHubClient.decode_text(node.model_dump())
        description = None
        if describe:
            description = await describer.describe(decoded, DescriptionKind.FILE, file_name=node.name)
        record = FileRecord(**node.model_dump(), aiDescription=description, decodedContent=decoded)
        return record.model_dump(mode="json", by_alias=True)
    except Exception as e:
        return error_response("/api/file", e)

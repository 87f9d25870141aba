from fastapi import APIRouter, Depends

from coders_dungeon.api.deps import error_response, get_description_service
from coders_dungeon.schemas.ai import DescribeRequest, DescribeResponse
from coders_dungeon.services.describe import DescriptionKind, DescriptionService

router = APIRouter(tags=["ai"])

@router.post("/ai/describe")
async def ai_describe(payload: DescribeRequest, describer: DescriptionService = Depends(get_description_service)):
    if not payload.code:
        return error_response("/api/ai/describe", ValueError("Code is required"), status_code=400)
    try:
        kind = DescriptionKind.from_label(payload.type)
        description = await describer.describe(payload.code, kind, file_name=payload.file_name)
        return DescribeResponse(description=description)
    except Exception as e:
        return error_response("/api/ai/describe", e)

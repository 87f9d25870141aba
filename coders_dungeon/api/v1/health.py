from fastapi import APIRouter, Request

from coders_dungeon.core.config import settings

router = APIRouter(tags=["health"])

@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "github_token": bool(settings.GITHUB_TOKEN),
        "gemini": request.app.state.describer.configured,
        "cache_entries": len(request.app.state.contents.cache),
    }

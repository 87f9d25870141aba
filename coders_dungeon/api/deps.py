from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from coders_dungeon.services.describe import DescriptionService
from coders_dungeon.services.github.contents import RepoContentsService


def get_contents_service(request: Request) -> RepoContentsService:
    return request.app.state.contents


def get_description_service(request: Request) -> DescriptionService:
    return request.app.state.describer


def error_response(where: str, exc: Exception, status_code: int = 500) -> JSONResponse:
    logger.error(f"Error in {where}: {exc}")
    return JSONResponse(status_code=status_code, content={"error": str(exc)})

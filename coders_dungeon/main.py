from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coders_dungeon.core.config import settings
from coders_dungeon.core.logging import setup_logging
from coders_dungeon.services.describe import DescriptionService
from coders_dungeon.services.github.contents import RepoContentsService

from coders_dungeon.api.v1.health import router as health_router
from coders_dungeon.api.v1.repo import router as repo_router
from coders_dungeon.api.v1.file import router as file_router
from coders_dungeon.api.v1.ai import router as ai_router

logger = setup_logging()

def create_app(
    contents: Optional[RepoContentsService] = None,
    describer: Optional[DescriptionService] = None,
) -> FastAPI:
    app = FastAPI(title=settings.APP_NAME)

    # one cache per app instance
    app.state.contents = contents if contents is not None else RepoContentsService()
    app.state.describer = describer if describer is not None else DescriptionService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    app.include_router(health_router, prefix="/api")
    app.include_router(repo_router, prefix="/api")
    app.include_router(file_router, prefix="/api")
    app.include_router(ai_router, prefix="/api")

    return app

app = create_app()

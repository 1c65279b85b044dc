import logging
import traceback
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import api_router
from app.cache import MetadataCache
from app.config import settings
from app.database import dispose_engine, init_db
from app.errors import MissingParameterError
from app.logging_config import configure_logging
from app.services.metadata import MetadataService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    configure_logging(settings.app_name, settings.log_level)
    await init_db()
    async with httpx.AsyncClient() as client:
        app.state.metadata_service = MetadataService(
            client,
            MetadataCache(
                ttl_seconds=settings.instagram_cache_ttl_seconds,
                max_entries=settings.instagram_cache_max_entries,
            ),
            timeout=settings.http_timeout_seconds,
        )
        logger.info("Server started", extra={"extra_environment": settings.environment})
        yield
    # Shutdown
    await dispose_engine()


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router)


@app.exception_handler(MissingParameterError)
async def missing_parameter_handler(
    request: Request, exc: MissingParameterError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"extra_path": request.url.path},
    )
    content = {"error": "Internal server error", "message": str(exc)}
    if settings.is_development:
        content["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok", "app": settings.app_name}

import logging
import traceback
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_metadata_service
from app.config import settings
from app.errors import FetchError, MissingParameterError
from app.schemas import InstagramMetadata, MetadataError
from app.services.metadata import MetadataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/instagram", tags=["instagram"])

URL_REQUIRED_MESSAGE = "URL parameter is required"


def metadata_error_body(exc: Exception) -> dict[str, Any]:
    body: dict[str, Any] = {
        "error": "Failed to fetch Instagram metadata",
        "details": str(exc),
    }
    if isinstance(exc, FetchError) and exc.status is not None:
        body["status"] = exc.status
        body["data"] = exc.data
    if settings.is_development:
        body["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return body


@router.get(
    "/oembed",
    response_model=InstagramMetadata,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "URL parameter is missing"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MetadataError},
    },
)
async def instagram_oembed(
    service: Annotated[MetadataService, Depends(get_metadata_service)],
    url: Annotated[Optional[str], Query()] = None,
) -> InstagramMetadata | JSONResponse:
    """Scrape title, caption, thumbnail and hashtags from an Instagram page."""
    if not url:
        logger.error("No URL provided in request")
        raise MissingParameterError("url", URL_REQUIRED_MESSAGE)

    try:
        return await service.extract(url)
    except Exception as e:
        logger.exception(
            "Error in Instagram metadata endpoint", extra={"extra_url": url}
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=metadata_error_body(e),
        )

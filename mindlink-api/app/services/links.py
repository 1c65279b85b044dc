import logging
from dataclasses import dataclass, field
from typing import Optional

from app.errors import FetchError
from app.schemas.link import LinkContentType, LinkCreate
from app.services import instagram
from app.services.metadata import MetadataService
from app.utils.urls import display_domain

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Uncategorized"


@dataclass
class LinkFields:
    """Column values for a new link, before the store assigns id and timestamps."""

    url: str
    title: str
    description: Optional[str]
    category: str
    tags: list[str] = field(default_factory=list)
    content_type: LinkContentType = "link"
    thumbnail_url: Optional[str] = None
    notes: Optional[str] = None


async def build_link_fields(
    payload: LinkCreate, metadata_service: MetadataService
) -> LinkFields:
    """Fill in whatever the caller left out of ``payload``.

    Instagram reels and posts are enriched from the page's Open Graph tags;
    if the page cannot be fetched, title and tags are derived from the URL.
    Every other URL, Instagram profiles included, gets its hostname as a title.
    Tags given by the caller, even an empty list, are kept as given.
    """
    url = str(payload.url)

    if not (
        instagram.is_instagram_url(url) and instagram.is_instagram_reel_or_post(url)
    ):
        return LinkFields(
            url=url,
            title=payload.title or display_domain(url),
            description=payload.description,
            category=payload.category or DEFAULT_CATEGORY,
            tags=_tags_or(payload, []),
            notes=payload.notes,
        )

    content_type = instagram.get_content_type(url)
    category = payload.category or instagram.default_description(content_type)

    try:
        metadata = await metadata_service.extract(url)
    except FetchError as e:
        logger.warning(
            "Instagram metadata unavailable, using URL-derived fields",
            extra={"extra_url": url, "extra_error": str(e), "extra_status": e.status},
        )
        username = instagram.username_from_path(url)
        return LinkFields(
            url=url,
            title=payload.title or instagram.display_title(username, content_type),
            description=payload.description,
            category=category,
            tags=_tags_or(payload, instagram.base_tags(username, content_type)),
            content_type=content_type,
            notes=payload.notes,
        )

    return LinkFields(
        url=url,
        title=payload.title or metadata.title,
        description=payload.description or metadata.description,
        category=category,
        tags=_tags_or(payload, metadata.tags),
        content_type=metadata.content_type,
        thumbnail_url=metadata.thumbnail_url or None,
        notes=payload.notes,
    )


def _tags_or(payload: LinkCreate, default: list[str]) -> list[str]:
    return list(payload.tags if payload.tags is not None else default)

import logging
import re
from typing import Optional

import httpx

from app.cache import MetadataCache
from app.errors import FetchError
from app.schemas.metadata import InstagramMetadata
from app.services.instagram import (
    DEFAULT_USERNAME,
    base_tags,
    default_description,
    display_title,
    get_content_type,
    sanitize_username,
)
from app.utils.urls import clean_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

# Instagram serves a stripped page to clients that do not look like a browser.
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
}

# Patterns follow JavaScript RegExp semantics: ``\d`` is ASCII-only and ``.``
# stops at any line terminator, not just ``\n``.
_ANY = r"[^\n\r\u2028\u2029]"

_TITLE_RE = re.compile(rf"<title>({_ANY}*?)</title>", re.ASCII)
_OG_DESCRIPTION_RE = re.compile(
    rf'<meta property="og:description" content="({_ANY}*?)"', re.ASCII
)
_OG_IMAGE_RE = re.compile(rf'<meta property="og:image" content="({_ANY}*?)"', re.ASCII)
_OG_SITE_NAME_RE = re.compile(
    rf'<meta property="og:site_name" content="({_ANY}*?)"', re.ASCII
)

_URL_USERNAME_RE = re.compile(r"instagram\.com/([^/]+)", re.ASCII)
_CAPTION_USERNAME_RE = re.compile(r" - ([^:]+):", re.ASCII)

_COUNTS_PREFIX_RE = re.compile(r"^\d+,\d+ likes, \d+ comments - [^:]+: ", re.ASCII)
_WRAPPING_QUOTES_RE = re.compile(rf'^"({_ANY}*)"\.?\Z', re.ASCII)
_POSTED_ON_RE = re.compile(r"on [A-Za-z]+ \d{1,2}, \d{4}", re.ASCII)
_HASHTAG_RE = re.compile(r"#[a-zA-Z0-9_]+", re.ASCII)


def _first_group(pattern: re.Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None


def derive_username(url: str, description: Optional[str]) -> str:
    """Pick a username from the URL, then the caption prefix, then a default.

    ``url`` must already be cleaned. The result is sanitized.
    """
    username = DEFAULT_USERNAME

    url_match = _first_group(_URL_USERNAME_RE, url)
    if url_match:
        username = url_match

    if username == DEFAULT_USERNAME and description is not None:
        caption_match = _first_group(_CAPTION_USERNAME_RE, description)
        if caption_match is not None:
            username = caption_match.strip()

    return sanitize_username(username)


def clean_caption(description: str) -> str:
    """Reduce an ``og:description`` to the caption the author wrote.

    Every step runs in order; a step whose pattern does not match leaves the
    text unchanged.
    """
    caption = _COUNTS_PREFIX_RE.sub("", description, count=1)
    caption = _WRAPPING_QUOTES_RE.sub(r"\1", caption, count=1)
    caption = caption.replace("&quot;", '"')
    caption = _POSTED_ON_RE.sub("", caption, count=1)
    return caption.strip()


def extract_hashtags(caption: str) -> list[str]:
    return _HASHTAG_RE.findall(caption)


def parse_metadata(url: str, html: str) -> InstagramMetadata:
    """Build metadata for ``url`` (already cleaned) from the page body.

    Never raises on unexpected markup; missing fields fall back to defaults.
    """
    title = _first_group(_TITLE_RE, html)
    description = _first_group(_OG_DESCRIPTION_RE, html)
    image = _first_group(_OG_IMAGE_RE, html)
    site_name = _first_group(_OG_SITE_NAME_RE, html)
    logger.debug(
        "Matched page fields",
        extra={
            "extra_has_title": title is not None,
            "extra_has_description": description is not None,
            "extra_has_image": image is not None,
            "extra_site_name": site_name,
        },
    )

    username = derive_username(url, description)
    caption = clean_caption(description) if description is not None else ""
    content_type = get_content_type(url)

    return InstagramMetadata(
        title=display_title(username, content_type),
        description=caption or default_description(content_type),
        thumbnail_url=image if image is not None else "",
        author_name=username,
        author_url=f"https://www.instagram.com/{username}/",
        type="video",
        tags=[*base_tags(username, content_type), *extract_hashtags(caption)],
        content_type=content_type,
    )


class MetadataService:
    """Fetches Instagram pages and extracts Open Graph metadata.

    Results are cached under the exact URL the caller passed in. Concurrent
    requests for the same uncached URL each fetch the page; the last one to
    finish wins the cache slot.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: MetadataCache,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._cache = cache
        self._timeout = timeout

    @property
    def cache(self) -> MetadataCache:
        return self._cache

    async def extract(self, url: str) -> InstagramMetadata:
        logger.info("Processing metadata request", extra={"extra_url": url})

        cached = self._cache.get(url)
        if cached is not None:
            logger.info("Returning cached metadata", extra={"extra_url": url})
            return cached

        fetch_url = clean_url(url)
        logger.debug("Cleaned URL", extra={"extra_clean_url": fetch_url})

        html = await self._fetch_page(fetch_url)
        metadata = parse_metadata(fetch_url, html)
        logger.debug(
            "Final metadata",
            extra={"extra_metadata": metadata.model_dump(by_alias=True)},
        )

        self._cache.set(url, metadata)
        return metadata

    async def _fetch_page(self, url: str) -> str:
        try:
            response = await self._client.get(
                url,
                headers=BROWSER_HEADERS,
                follow_redirects=True,
                timeout=self._timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(
                "Page fetch failed",
                extra={"extra_url": url, "extra_error": str(e)},
            )
            raise FetchError(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.error(
                "Page fetch returned an error status",
                extra={
                    "extra_url": url,
                    "extra_status": response.status_code,
                },
            )
            raise FetchError(
                f"Request failed with status code {response.status_code}",
                status=response.status_code,
                data=response.text,
            )

        return response.text

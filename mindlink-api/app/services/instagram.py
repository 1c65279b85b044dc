import re

from app.schemas.metadata import ContentType
from app.utils.urls import clean_url, get_domain

_REEL_OR_POST_RE = re.compile(
    r"^https?://(www\.)?instagram\.com/(reel|p)/[A-Za-z0-9_-]+"
)
_USERNAME_STRIP_RE = re.compile(r"[^a-zA-Z0-9._]")

DEFAULT_USERNAME = "instagram"


def is_instagram_url(url: str) -> bool:
    return "instagram.com" in get_domain(url)


def is_instagram_reel_or_post(url: str) -> bool:
    return _REEL_OR_POST_RE.match(url) is not None


def get_content_type(url: str) -> ContentType:
    """Classify by path alone: any URL containing ``/reel/`` is a reel."""
    return "reel" if "/reel/" in clean_url(url) else "post"


def content_label(content_type: ContentType) -> str:
    return "Reel" if content_type == "reel" else "Post"


def display_title(username: str, content_type: ContentType) -> str:
    return f"{content_label(content_type)} by @{username}"


def default_description(content_type: ContentType) -> str:
    return f"Instagram {content_label(content_type)}"


def sanitize_username(raw: str) -> str:
    """Keep only ``[a-zA-Z0-9._]`` and lowercase the rest."""
    return _USERNAME_STRIP_RE.sub("", raw).lower()


def username_from_path(url: str) -> str:
    """Fourth ``/``-separated segment of the URL, as a saved link shows it.

    For ``https://www.instagram.com/reel/XYZ`` this is ``reel``; an absent or
    empty segment yields ``instagram``.
    """
    parts = url.split("/")
    if len(parts) > 3 and parts[3]:
        return parts[3]
    return DEFAULT_USERNAME


def base_tags(username: str, content_type: ContentType) -> list[str]:
    return ["Instagram", content_type, f"@{username}"]

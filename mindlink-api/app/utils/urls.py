from urllib.parse import urlsplit


def get_domain(url: str) -> str:
    """Return the hostname of ``url``, or an empty string if it has none."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def display_domain(url: str) -> str:
    """Hostname without a leading ``www.``; falls back to the raw URL."""
    hostname = get_domain(url)
    if not hostname:
        return url
    return hostname.removeprefix("www.")


def clean_url(url: str) -> str:
    """Drop the query string and a single trailing slash.

    Fragments are left alone; only the first ``?`` is significant.
    """
    base = url.split("?", 1)[0]
    if base.endswith("/"):
        base = base[:-1]
    return base

"""URL helpers for turning page references into absolute URLs."""

from urllib.parse import urljoin, urlsplit


def resolve_url(reference: str, base_url: str) -> str:
    """
    Resolve an image or icon reference against the page URL.

    Absolute http(s) references are returned unchanged. Anything that fails
    to parse is returned as given.

    Args:
        reference: href/content value from the document
        base_url: URL of the page the reference appeared on

    Returns:
        Absolute URL, or the original reference
    """
    if reference.startswith(("http://", "https://")):
        return reference

    try:
        return urljoin(base_url, reference)
    except ValueError:
        return reference


def default_favicon(page_url: str) -> str:
    """Return the conventional /favicon.ico location for a page's origin."""
    parts = urlsplit(page_url)
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{host}/favicon.ico"

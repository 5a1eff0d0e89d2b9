"""
Link preview metadata extraction from HTML.

The document is walked once, depth-first in document order. For single
valued fields (title, description, favicon) the first eligible source wins.
Images and site names accumulate in document order; only twitter:image
entries are de-duplicated, by exact string.
"""

from dataclasses import dataclass, field

import structlog
from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from metadata_party.exceptions import ParseError
from metadata_party.utils.urls import default_favicon, resolve_url

logger = structlog.get_logger(__name__)


@dataclass
class ExtractedMetadata:
    """Fields collected from a document before they become a record."""

    title: str | None = None
    description: str | None = None
    images: list[str] = field(default_factory=list)
    site_names: list[str] = field(default_factory=list)
    favicon: str | None = None


def parse_html(html: str, url: str) -> BeautifulSoup:
    """
    Parse an HTML document.

    Attribute values are kept as plain strings, so `rel="shortcut icon"`
    stays a single value.

    Raises:
        ParseError: If the parser rejects the document
    """
    try:
        return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
    except Exception as e:
        raise ParseError(url, str(e) or type(e).__name__) from e


def extract_metadata(html: str, page_url: str) -> ExtractedMetadata:
    """
    Extract preview metadata from an HTML document.

    Args:
        html: Raw HTML (may be truncated)
        page_url: URL the document was requested from

    Returns:
        ExtractedMetadata; favicon always set

    Raises:
        ParseError: If the document cannot be parsed
    """
    soup = parse_html(html, page_url)
    return extract_from_soup(soup, page_url)


def extract_from_soup(soup: BeautifulSoup, page_url: str) -> ExtractedMetadata:
    """Walk a parsed document and collect preview metadata."""
    metadata = ExtractedMetadata()

    for node in soup.descendants:
        if not isinstance(node, Tag):
            continue
        if node.name == "title":
            _extract_title_tag(node, metadata)
        elif node.name == "meta":
            _extract_meta_tag(node, metadata, page_url)
        elif node.name == "link":
            _extract_link_tag(node, metadata, page_url)

    if not metadata.favicon:
        metadata.favicon = default_favicon(page_url)

    logger.debug(
        "metadata_collected",
        url=page_url,
        has_title=metadata.title is not None,
        images=len(metadata.images),
        site_names=len(metadata.site_names),
    )
    return metadata


def _extract_title_tag(tag: Tag, metadata: ExtractedMetadata) -> None:
    if metadata.title or not tag.contents:
        return
    first = tag.contents[0]
    if isinstance(first, NavigableString) and not isinstance(first, Comment):
        metadata.title = first.strip() or None


def _extract_meta_tag(tag: Tag, metadata: ExtractedMetadata, page_url: str) -> None:
    name = (tag.get("name") or "").lower()
    prop = (tag.get("property") or "").lower()
    content = tag.get("content") or ""

    if not content:
        return

    # Order matters: a tag that misses one rule may still match a later one
    if name == "description" and not metadata.description:
        metadata.description = content
    elif prop == "og:description" and not metadata.description:
        metadata.description = content
    elif prop == "og:title" and not metadata.title:
        metadata.title = content
    elif prop == "og:image":
        metadata.images.append(resolve_url(content, page_url))
    elif prop == "og:site_name":
        metadata.site_names.append(content)
    elif name == "twitter:image":
        image_url = resolve_url(content, page_url)
        if image_url not in metadata.images:
            metadata.images.append(image_url)
    elif name == "twitter:title" and not metadata.title:
        metadata.title = content
    elif name == "twitter:description" and not metadata.description:
        metadata.description = content


def _extract_link_tag(tag: Tag, metadata: ExtractedMetadata, page_url: str) -> None:
    rel = (tag.get("rel") or "").lower()
    href = tag.get("href") or ""

    if not href:
        return

    if "icon" in rel and not metadata.favicon:
        metadata.favicon = resolve_url(href, page_url)

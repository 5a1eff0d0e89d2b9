"""HTML metadata extractors."""

from metadata_party.extractors.html_meta import ExtractedMetadata, extract_metadata

__all__ = ["ExtractedMetadata", "extract_metadata"]

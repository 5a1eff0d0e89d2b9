"""Utility modules for Metadata Party."""

from metadata_party.utils.ssrf import ValidatedTarget, is_blocked_address, validate_url
from metadata_party.utils.urls import default_favicon, resolve_url

__all__ = [
    "ValidatedTarget",
    "is_blocked_address",
    "validate_url",
    "default_favicon",
    "resolve_url",
]

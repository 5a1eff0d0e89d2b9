"""Configuration for Metadata Party."""

from metadata_party.config.settings import Settings, settings

__all__ = ["Settings", "settings"]

"""MCP tools for Metadata Party."""

from metadata_party.tools.registration import register_all_tools

__all__ = ["register_all_tools"]

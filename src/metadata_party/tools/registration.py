"""Tool registration for the MCP server."""

from mcp.server.fastmcp import FastMCP


def register_all_tools(mcp: FastMCP) -> None:
    """
    Register all tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """
    from metadata_party.tools import extract

    extract.register(mcp)

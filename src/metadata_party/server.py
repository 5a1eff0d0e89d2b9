"""
FastMCP server with all tools registered.

Configured for stateless HTTP mode for multi-client support.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
import structlog
from mcp.server.fastmcp import FastMCP

from metadata_party.config import settings
from metadata_party.fetchers.bounded import BoundedFetcher
from metadata_party.pipeline import MetadataPipeline
from metadata_party.tools import register_all_tools
from metadata_party.utils.ssrf import validate_url

logger = structlog.get_logger(__name__)


@dataclass
class AppContext:
    """Shared application resources available to all tools."""

    http_client: httpx.AsyncClient
    pipeline: MetadataPipeline


def create_http_client() -> httpx.AsyncClient:
    """
    Create the shared outbound HTTP client.

    Redirects are never followed by the client itself; the fetcher follows
    them hop by hop.
    """
    return httpx.AsyncClient(
        limits=httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        ),
        timeout=httpx.Timeout(
            connect=5.0,
            read=settings.request_timeout,
            write=10.0,
            pool=5.0,
        ),
        http2=True,
        follow_redirects=False,
    )


def create_pipeline(http_client: httpx.AsyncClient) -> MetadataPipeline:
    """
    Create the extraction pipeline.

    Args:
        http_client: Shared HTTP client

    Returns:
        Pipeline with the SSRF guard on the first request and every redirect
    """
    fetcher = BoundedFetcher(
        timeout_seconds=settings.request_timeout,
        max_redirects=settings.max_redirects,
        max_body_bytes=settings.max_body_bytes,
        headers=settings.get_request_headers(),
        http_client=http_client,
        redirect_guard=validate_url,
    )
    return MetadataPipeline(fetcher, guard=validate_url)


@asynccontextmanager
async def app_lifespan(_server: FastMCP) -> AsyncIterator[AppContext]:
    """
    Manage application lifecycle.

    Initialize expensive resources once, share across all requests.
    """
    logger.info(
        "starting_mcp_server",
        server_name="Metadata Party",
        debug=settings.debug,
    )

    http_client = create_http_client()
    pipeline = create_pipeline(http_client)

    try:
        yield AppContext(http_client=http_client, pipeline=pipeline)
    finally:
        logger.info("shutting_down_mcp_server")
        await pipeline.close()
        await http_client.aclose()


# Create FastMCP server
# stateless_http=True allows multiple concurrent clients
# json_response=True for structured responses
mcp = FastMCP(
    "Metadata Party",
    lifespan=app_lifespan,
    stateless_http=True,
    json_response=True,
    streamable_http_path="/",
)

register_all_tools(mcp)

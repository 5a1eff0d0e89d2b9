"""Metadata extraction tool for MCP, plus the shared request handler."""

from typing import Any

import structlog
from mcp.server.fastmcp import Context, FastMCP

from metadata_party.exceptions import ExtractionError, InvalidBatchSizeError
from metadata_party.models.metadata import MetadataRequest
from metadata_party.pipeline import MetadataPipeline

logger = structlog.get_logger(__name__)


async def handle_extract(
    pipeline: MetadataPipeline, request: MetadataRequest
) -> tuple[int, dict[str, Any]]:
    """
    Run an extraction request and build its response.

    Args:
        pipeline: Extraction pipeline
        request: Parsed request envelope

    Returns:
        (HTTP status, JSON payload). Batch item failures stay inside a 200
        payload; a failed single URL maps to 500.
    """
    try:
        result = await pipeline.run(request.targets())
    except InvalidBatchSizeError as e:
        return 400, {"error": e.message}
    except ExtractionError as e:
        return 500, {"error": e.message}

    return 200, result.to_payload()


def register(mcp: FastMCP) -> None:
    """Register the extract_metadata tool with the MCP server."""

    @mcp.tool()
    async def extract_metadata(
        url: str | None = None,
        urls: list[str] | None = None,
        ctx: Context[Any, Any] = None,  # type: ignore[assignment, type-arg]
    ) -> dict[str, Any]:
        """
        Extract link preview metadata (title, description, images, site name, favicon).

        Pass a single `url`, or up to 5 `urls` to fetch concurrently. Private and
        internal network addresses are refused.

        Args:
            url: Single URL to extract
            urls: List of URLs to extract (max 5)

        Returns:
            For one URL, the metadata record or {"error": ...}.
            For several, {"results": [...], "total": n} in request order; failed
            items contain only "url" and "error".
        """
        from metadata_party.server import AppContext

        app_ctx: AppContext = ctx.request_context.lifespan_context

        request = MetadataRequest(url=url, urls=urls)
        status, payload = await handle_extract(app_ctx.pipeline, request)

        if status != 200:
            logger.info("extract_tool_error", status=status, error=payload.get("error"))

        return payload

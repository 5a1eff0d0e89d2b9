"""
Starlette ASGI application exposing the extraction endpoint, with the
FastMCP server mounted at /mcp.
"""

import contextlib
from collections.abc import AsyncIterator

import structlog
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from metadata_party import __version__
from metadata_party.config import settings
from metadata_party.middleware import RequestLoggingMiddleware
from metadata_party.models.metadata import MetadataRequest
from metadata_party.server import create_http_client, create_pipeline, mcp
from metadata_party.tools.extract import handle_extract
from metadata_party.utils.health import HealthChecker

logger = structlog.get_logger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Initializes shared resources on startup, cleans up on shutdown.
    """
    logger.info(
        "starting_http_server",
        host=settings.host,
        port=settings.port,
        debug=settings.debug,
    )

    http_client = create_http_client()
    app.state.pipeline = create_pipeline(http_client)

    try:
        # MCP server has its own lifespan, managed via session_manager
        async with mcp.session_manager.run():
            yield
    finally:
        await app.state.pipeline.close()
        await http_client.aclose()
        logger.info("http_server_shutdown")


async def extract(request: Request) -> JSONResponse:
    """
    Extract metadata from 1-5 URLs.

    Body: {"url": "..."} or {"urls": ["...", ...]}.
    """
    try:
        body = await request.json()
        payload = MetadataRequest.model_validate(body)
    except ValueError:
        return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

    status, data = await handle_extract(request.app.state.pipeline, payload)
    return JSONResponse(data, status_code=status)


async def method_not_allowed(request: Request, exc: HTTPException) -> JSONResponse:
    """Answer a wrong method with the same JSON error envelope as other failures."""
    message = "Method not allowed"
    if request.url.path == "/extract":
        message = "Method not allowed. Use POST."
    return JSONResponse({"error": message}, status_code=405, headers=exc.headers)


async def health_check(_request: Request) -> JSONResponse:
    """
    Kubernetes-compatible health check endpoint.

    Returns 200 if healthy, 503 if unhealthy.
    """
    checker = HealthChecker()
    status = await checker.check_all()

    http_status = 200 if status["healthy"] else 503
    return JSONResponse(status, status_code=http_status)


async def liveness_check(_request: Request) -> JSONResponse:
    """Liveness probe - always 200 while the server is running."""
    checker = HealthChecker()
    status = await checker.check_liveness()

    return JSONResponse(status, status_code=200)


async def root(_request: Request) -> JSONResponse:
    """Root endpoint with server information."""
    return JSONResponse(
        {
            "name": "metadata.party",
            "version": __version__,
            "endpoints": {
                "POST /extract": (
                    "Extract metadata from 1-5 URLs "
                    "(use 'url' for single or 'urls' for batch)"
                ),
                "GET /health": "Health check endpoint",
                "GET /alive": "Liveness probe",
                "/mcp": "MCP streamable HTTP endpoint",
            },
            "tools": ["extract_metadata"],
        }
    )


# Middleware wraps the router; the pipeline never sees it
middleware = [
    Middleware(RequestLoggingMiddleware),
    Middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["Mcp-Session-Id"],  # Required for MCP sessions
    ),
]

# Build Starlette application
app = Starlette(
    debug=settings.debug,
    routes=[
        Route("/", root, methods=["GET"]),
        Route("/extract", extract, methods=["POST"]),
        Route("/health", health_check, methods=["GET"]),
        Route("/alive", liveness_check, methods=["GET"]),
        # MCP endpoint - Streamable HTTP
        Mount("/mcp", app=mcp.streamable_http_app()),
    ],
    middleware=middleware,
    exception_handlers={405: method_not_allowed},
    lifespan=lifespan,
)

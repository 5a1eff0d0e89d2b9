"""Unit tests for the extract handler and MCP tool using DummyMCP."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from metadata_party.exceptions import FetchError, InvalidBatchSizeError
from metadata_party.fetchers.bounded import BoundedFetcher
from metadata_party.models.metadata import MetadataRecord, MetadataRequest
from metadata_party.models.outcome import BatchResult, Failure, Success
from metadata_party.pipeline import MetadataPipeline
from metadata_party.tools.extract import handle_extract


class DummyMCP:
    def __init__(self) -> None:
        self.tools: dict[str, object] = {}

    def tool(self):
        def decorator(func):
            self.tools[func.__name__] = func
            return func

        return decorator


class DummyCtx:
    def __init__(self, app_ctx):
        self.request_context = SimpleNamespace(lifespan_context=app_ctx)


def _record(url: str) -> MetadataRecord:
    return MetadataRecord(url=url, domain="example.com", title="Example", duration_ms=5)


@pytest.mark.asyncio
async def test_handle_extract_single_success():
    pipeline = MagicMock()
    pipeline.run = AsyncMock(return_value=_record("https://example.com/"))

    status, payload = await handle_extract(pipeline, MetadataRequest(url="https://example.com/"))

    assert status == 200
    assert payload["title"] == "Example"
    pipeline.run.assert_awaited_once_with(["https://example.com/"])


@pytest.mark.asyncio
async def test_handle_extract_single_failure():
    pipeline = MagicMock()
    pipeline.run = AsyncMock(side_effect=FetchError("https://example.com/", "refused"))

    status, payload = await handle_extract(pipeline, MetadataRequest(url="https://example.com/"))

    assert status == 500
    assert payload == {"error": "failed to fetch URL: refused"}


@pytest.mark.asyncio
async def test_handle_extract_invalid_batch():
    pipeline = MagicMock()
    pipeline.run = AsyncMock(side_effect=InvalidBatchSizeError(6, 5))

    status, payload = await handle_extract(pipeline, MetadataRequest(urls=["u"] * 6))

    assert status == 400
    assert payload == {"error": "Maximum 5 URLs allowed per request"}


@pytest.mark.asyncio
async def test_handle_extract_batch_with_failure_is_200():
    failure = Failure(index=1, url="https://b.example/", error=FetchError("https://b.example/", "x"))
    pipeline = MagicMock()
    pipeline.run = AsyncMock(
        return_value=BatchResult(
            outcomes=[Success(index=0, record=_record("https://a.example/")), failure]
        )
    )

    status, payload = await handle_extract(
        pipeline, MetadataRequest(urls=["https://a.example/", "https://b.example/"])
    )

    assert status == 200
    assert payload["total"] == 2
    assert payload["results"][1] == {"url": "https://b.example/", "error": "failed to fetch URL: x"}


@pytest.mark.asyncio
async def test_extract_metadata_tool():
    from metadata_party.tools import extract as extract_tool

    mcp = DummyMCP()
    extract_tool.register(mcp)
    extract_metadata = mcp.tools["extract_metadata"]

    pipeline = MagicMock()
    pipeline.run = AsyncMock(return_value=_record("https://example.com/"))
    ctx = DummyCtx(SimpleNamespace(pipeline=pipeline))

    result = await extract_metadata(url="https://example.com/", ctx=ctx)

    assert result["url"] == "https://example.com/"
    assert result["sitename"] == []


@pytest.mark.asyncio
async def test_extract_metadata_tool_requires_a_url():
    from metadata_party.tools import extract as extract_tool

    mcp = DummyMCP()
    extract_tool.register(mcp)
    extract_metadata = mcp.tools["extract_metadata"]

    pipeline = MetadataPipeline(MagicMock())
    ctx = DummyCtx(SimpleNamespace(pipeline=pipeline))

    result = await extract_metadata(ctx=ctx)

    assert "At least one URL is required" in result["error"]


def test_register_all_tools():
    from metadata_party.tools import register_all_tools

    mcp = DummyMCP()
    register_all_tools(mcp)

    assert "extract_metadata" in mcp.tools


@pytest.mark.asyncio
async def test_handle_extract_url_rejected_by_client(public_dns, mock_http):
    pipeline = MetadataPipeline(BoundedFetcher())

    status, payload = await handle_extract(
        pipeline, MetadataRequest(url="https://example.com/a\x01b")
    )

    assert status == 500
    assert payload["error"].startswith("invalid URL:")

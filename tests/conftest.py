"""Shared test fixtures for the Metadata Party test suite."""

from collections.abc import Callable
from typing import Any

import pytest
import respx

# ─── Pytest Configuration ────────────────────────────────────────


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no I/O)")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


# ─── Async Backend ───────────────────────────────────────────────


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


# ─── Settings Fixtures ───────────────────────────────────────────


@pytest.fixture
def test_settings():
    """Settings with small limits for fast tests."""
    from metadata_party.config import Settings

    return Settings(
        debug=True,
        log_level="DEBUG",
        request_timeout=5.0,
        max_redirects=3,
        max_body_bytes=1024,
    )


# ─── HTTP / DNS Fixtures ─────────────────────────────────────────


@pytest.fixture
def mock_http():
    """RESPX mock router for HTTP mocking."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def fake_dns(monkeypatch) -> Callable[[dict[str, list[str]]], list[str]]:
    """
    Replace the guard's resolver with a static table.

    Returns a function that installs the table; it returns the list that
    records every hostname looked up.
    """
    from metadata_party.utils import ssrf

    lookups: list[str] = []

    def install(table: dict[str, list[str]]) -> list[str]:
        async def resolve(hostname: str) -> list[str]:
            lookups.append(hostname)
            if hostname not in table:
                raise OSError(f"[Errno -2] Name or service not known: {hostname}")
            return list(table[hostname])

        monkeypatch.setattr(ssrf, "resolve_host", resolve)
        return lookups

    return install


@pytest.fixture
def public_dns(fake_dns) -> list[str]:
    """Resolve the hosts used across tests to public addresses."""
    return fake_dns(
        {
            "127.0.0.1": ["127.0.0.1"],
            "example.com": ["93.184.216.34"],
            "example.org": ["93.184.216.35"],
            "example.net": ["93.184.216.36"],
            "cdn.example.com": ["93.184.216.37"],
            "news.example": ["203.0.114.10"],
            "blog.example": ["203.0.114.11"],
            "shop.example": ["203.0.114.12"],
            "docs.example": ["203.0.114.13"],
            "wiki.example": ["203.0.114.14"],
            "evil.example": ["93.184.216.40", "127.0.0.1"],
            "internal.example": ["10.0.0.5"],
            "metadata.example": ["169.254.169.254"],
        }
    )


# ─── Sample Data Fixtures ────────────────────────────────────────


@pytest.fixture
def sample_html_content() -> str:
    """Sample HTML with the common preview tags."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <title>  Example Article  </title>
        <meta name="description" content="An example article about previews">
        <meta property="og:title" content="OG Example Article">
        <meta property="og:description" content="OG description">
        <meta property="og:image" content="/images/cover.png">
        <meta property="og:site_name" content="Example News">
        <meta name="twitter:image" content="https://example.com/images/cover.png">
        <link rel="stylesheet" href="/style.css">
        <link rel="shortcut icon" href="/static/favicon.png">
    </head>
    <body>
        <h1>Example Article</h1>
        <p>Body text.</p>
    </body>
    </html>
    """

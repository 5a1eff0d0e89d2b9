"""httpx-based fetcher with redirect, size and time limits."""

from collections.abc import Awaitable, Callable

import anyio
import httpx
import structlog

from metadata_party.exceptions import (
    FetchError,
    FetchTimeoutError,
    HTTPError,
    InvalidURLError,
    TooManyRedirectsError,
)
from metadata_party.fetchers.base import FetchedPage
from metadata_party.utils.ssrf import validate_url

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "metadata.party/1.0 (+https://github.com/metadata-party/metadata-party)"
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024

RedirectGuard = Callable[[str], Awaitable[object]]


class BoundedFetcher:
    """
    Fetcher that never follows more than `max_redirects` hops, never waits
    longer than `timeout_seconds` overall and never keeps more than
    `max_body_bytes` of a response body.

    Redirects are followed by hand so every hop can be checked by
    `redirect_guard` before it is requested.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        max_redirects: int = 10,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
        headers: dict[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
        redirect_guard: RedirectGuard | None = validate_url,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            timeout_seconds: Budget for the whole fetch, redirects and body included
            max_redirects: Redirect hops allowed before failing
            max_body_bytes: Body bytes kept; the rest is dropped
            headers: Request headers (defaults to user agent and Accept)
            http_client: Shared HTTP client (optional)
            redirect_guard: Awaitable check run on each redirect target
                (defaults to the SSRF guard; None disables it)
        """
        self._timeout = timeout_seconds
        self._max_redirects = max_redirects
        self._max_body_bytes = max_body_bytes
        self._headers = headers or {"User-Agent": DEFAULT_USER_AGENT, "Accept": DEFAULT_ACCEPT}
        self._http_client = http_client
        self._redirect_guard = redirect_guard

    @property
    def name(self) -> str:
        """Return the fetcher name."""
        return "bounded"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout, follow_redirects=False)

    async def fetch(self, url: str) -> FetchedPage:
        """
        Fetch a page within the configured limits.

        Args:
            url: URL to fetch

        Returns:
            FetchedPage with the decoded (possibly truncated) document

        Raises:
            FetchTimeoutError: If the time budget runs out
            TooManyRedirectsError: If the redirect cap is exceeded
            HTTPError: If the final status is not 200
            FetchError: On any other transport failure
        """
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            with anyio.fail_after(self._timeout):
                return await self._fetch(client, url)
        except TimeoutError as e:
            raise FetchTimeoutError(url, self._timeout) from e
        finally:
            if should_close:
                await client.aclose()

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> FetchedPage:
        redirects = 0

        try:
            request = client.build_request("GET", url, headers=self._headers)
            while True:
                response = await client.send(request, stream=True, follow_redirects=False)
                try:
                    if response.next_request is not None:
                        redirects += 1
                        if redirects > self._max_redirects:
                            raise TooManyRedirectsError(url, self._max_redirects)

                        next_request = response.next_request
                        logger.debug(
                            "following_redirect",
                            url=url,
                            location=str(next_request.url),
                            hop=redirects,
                        )
                        if self._redirect_guard is not None:
                            await self._redirect_guard(str(next_request.url))
                        request = next_request
                        continue

                    if response.status_code != 200:
                        raise HTTPError(url, response.status_code)

                    body, truncated = await self._read_limited(response)
                    html = self._decode(body, response.charset_encoding)
                finally:
                    await response.aclose()

                if truncated:
                    logger.info("body_truncated", url=url, limit_bytes=self._max_body_bytes)

                logger.debug(
                    "page_fetched",
                    url=url,
                    final_url=str(response.url),
                    size_bytes=len(body),
                    redirects=redirects,
                )

                return FetchedPage(
                    url=url,
                    final_url=str(response.url),
                    status_code=response.status_code,
                    html=html,
                    truncated=truncated,
                )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidURLError(url, str(e)) from e
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(url, self._timeout) from e
        except httpx.HTTPError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e

    async def _read_limited(self, response: httpx.Response) -> tuple[bytes, bool]:
        """Read the body up to the ceiling, reporting whether bytes were dropped."""
        body = bytearray()
        async for chunk in response.aiter_bytes():
            remaining = self._max_body_bytes - len(body)
            if len(chunk) > remaining:
                body.extend(chunk[:remaining])
                return bytes(body), True
            body.extend(chunk)
        return bytes(body), False

    @staticmethod
    def _decode(body: bytes, encoding: str | None) -> str:
        try:
            return body.decode(encoding or "utf-8", errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    async def close(self) -> None:
        """Close the fetcher and release resources."""
        # The shared client is owned by the caller
        pass

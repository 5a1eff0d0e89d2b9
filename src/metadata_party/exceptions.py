"""Custom exceptions for Metadata Party."""


class MetadataPartyError(Exception):
    """Base exception for all Metadata Party errors."""

    pass


# ─── Extraction Errors ───────────────────────────────────────────


class ExtractionError(MetadataPartyError):
    """Base exception for errors tied to a single target URL."""

    kind = "extraction_error"

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        self.message = message
        super().__init__(f"[{url}] {message}")


class InvalidURLError(ExtractionError):
    """Raised when a URL cannot be parsed or uses a disallowed scheme."""

    kind = "invalid_url"

    def __init__(self, url: str, reason: str = "Invalid URL format") -> None:
        self.reason = reason
        super().__init__(url, f"invalid URL: {reason}")


class ResolutionError(ExtractionError):
    """Raised when the target hostname cannot be resolved."""

    kind = "resolution_error"

    def __init__(self, url: str, hostname: str, reason: str) -> None:
        self.hostname = hostname
        super().__init__(url, f"failed to resolve hostname {hostname}: {reason}")


class BlockedAddressError(ExtractionError):
    """Raised when a hostname resolves to a private or internal address."""

    kind = "blocked_address"

    def __init__(self, url: str, address: str) -> None:
        self.address = address
        super().__init__(
            url, f"access to private/internal IP addresses is not allowed: {address}"
        )


class FetchError(ExtractionError):
    """Raised when the outbound request fails at the transport level."""

    kind = "fetch_error"

    def __init__(self, url: str, reason: str) -> None:
        self.reason = reason
        super().__init__(url, f"failed to fetch URL: {reason}")


class FetchTimeoutError(FetchError):
    """Raised when a fetch exceeds its time budget."""

    kind = "fetch_timeout"

    def __init__(self, url: str, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(url, f"timed out after {timeout_seconds}s")


class TooManyRedirectsError(FetchError):
    """Raised when a fetch follows more redirects than allowed."""

    kind = "too_many_redirects"

    def __init__(self, url: str, max_redirects: int) -> None:
        self.max_redirects = max_redirects
        super().__init__(url, f"too many redirects (limit {max_redirects})")


class HTTPError(ExtractionError):
    """Raised when the final response status is not 200."""

    kind = "http_error"

    def __init__(self, url: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(url, f"HTTP error: {status_code}")


class ParseError(ExtractionError):
    """Raised when the HTML document cannot be parsed."""

    kind = "parse_error"

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(url, f"failed to parse HTML: {reason}")


# ─── Validation Errors ───────────────────────────────────────────


class InvalidBatchSizeError(MetadataPartyError):
    """Raised when a request carries no URLs or more than the batch limit."""

    def __init__(self, count: int, maximum: int) -> None:
        self.count = count
        self.maximum = maximum
        if count < 1:
            message = "At least one URL is required (use 'url' or 'urls' field)"
        else:
            message = f"Maximum {maximum} URLs allowed per request"
        self.message = message
        super().__init__(message)

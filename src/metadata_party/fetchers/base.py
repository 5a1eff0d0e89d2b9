"""Base protocol for page fetchers."""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class FetchedPage:
    """An HTML document retrieved for extraction."""

    url: str
    final_url: str
    status_code: int
    html: str
    truncated: bool = False


@runtime_checkable
class Fetcher(Protocol):
    """
    Protocol for page fetchers.

    All fetchers must implement this interface.
    """

    @abstractmethod
    async def fetch(self, url: str) -> FetchedPage:
        """
        Fetch a single page.

        Args:
            url: URL that already passed the SSRF guard

        Returns:
            FetchedPage with the decoded document

        Raises:
            ExtractionError: If fetching fails
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the fetcher and release resources."""
        ...

"""Page fetchers."""

from metadata_party.fetchers.base import FetchedPage, Fetcher
from metadata_party.fetchers.bounded import BoundedFetcher

__all__ = ["BoundedFetcher", "FetchedPage", "Fetcher"]

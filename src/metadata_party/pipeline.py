"""
Extraction pipeline and batch orchestrator.

Each URL runs guard -> fetch -> parse -> extract as an independent unit of
work. A batch starts one task per URL, waits for all of them, then orders
the outcomes by their input index. No unit cancels or retries another.
"""

import time
from collections.abc import Awaitable, Callable

import anyio
import structlog

from metadata_party.exceptions import ExtractionError, InvalidBatchSizeError
from metadata_party.extractors.html_meta import extract_from_soup, parse_html
from metadata_party.fetchers.base import Fetcher
from metadata_party.models.metadata import MetadataRecord
from metadata_party.models.outcome import BatchResult, Failure, Outcome, Success
from metadata_party.utils.ssrf import ValidatedTarget, validate_url

logger = structlog.get_logger(__name__)

MAX_BATCH_SIZE = 5

Guard = Callable[[str], Awaitable[ValidatedTarget]]


def validate_batch_size(count: int) -> None:
    """
    Check that a request carries between 1 and MAX_BATCH_SIZE URLs.

    Raises:
        InvalidBatchSizeError: If the count is out of range
    """
    if count < 1 or count > MAX_BATCH_SIZE:
        raise InvalidBatchSizeError(count, MAX_BATCH_SIZE)


class MetadataPipeline:
    """Runs metadata extraction for single URLs and batches."""

    def __init__(self, fetcher: Fetcher, guard: Guard = validate_url) -> None:
        """
        Initialize the pipeline.

        Args:
            fetcher: Fetcher used for the outbound request
            guard: SSRF check run before each fetch
        """
        self._fetcher = fetcher
        self._guard = guard

    async def extract(self, url: str) -> MetadataRecord:
        """
        Extract metadata for one URL.

        Args:
            url: Target URL

        Returns:
            MetadataRecord for the page

        Raises:
            ExtractionError: If any stage fails
        """
        start_time = time.monotonic()

        target = await self._guard(url)
        page = await self._fetcher.fetch(url)
        soup = parse_html(page.html, url)

        duration_ms = int((time.monotonic() - start_time) * 1000)

        fields = extract_from_soup(soup, url)

        return MetadataRecord(
            url=url,
            domain=target.host,
            duration_ms=duration_ms,
            title=fields.title,
            description=fields.description,
            images=fields.images,
            site_names=fields.site_names,
            favicon=fields.favicon,
        )

    async def extract_outcome(self, index: int, url: str) -> Outcome:
        """
        Extract metadata for one URL, returning failures instead of raising.

        Args:
            index: Position of the URL in its request
            url: Target URL

        Returns:
            Success or Failure tagged with `index`
        """
        try:
            record = await self.extract(url)
        except ExtractionError as e:
            logger.warning(
                "metadata_extraction_failed",
                url=url,
                index=index,
                error_kind=e.kind,
                error=e.message,
            )
            return Failure(index=index, url=url, error=e)
        except Exception as e:
            logger.exception("metadata_extraction_error", url=url, index=index)
            error = ExtractionError(url, str(e) or type(e).__name__)
            return Failure(index=index, url=url, error=error)

        logger.info(
            "metadata_extracted",
            url=url,
            index=index,
            duration_ms=record.duration_ms,
        )
        return Success(index=index, record=record)

    async def extract_batch(self, urls: list[str]) -> BatchResult:
        """
        Extract metadata for 1-5 URLs concurrently.

        Args:
            urls: Target URLs

        Returns:
            BatchResult ordered like `urls`

        Raises:
            InvalidBatchSizeError: If `urls` is empty or too long
        """
        validate_batch_size(len(urls))

        start_time = time.monotonic()
        completed: list[Outcome] = []

        async def run_unit(index: int, url: str) -> None:
            completed.append(await self.extract_outcome(index, url))

        logger.info("batch_dispatched", total=len(urls))

        async with anyio.create_task_group() as tg:
            for index, url in enumerate(urls):
                tg.start_soon(run_unit, index, url)

        # Completion order is arbitrary; place each outcome at its index
        result = BatchResult.from_outcomes(completed)

        logger.info(
            "batch_completed",
            total=result.total,
            successful=result.successful,
            failed=result.failed,
            elapsed_ms=int((time.monotonic() - start_time) * 1000),
        )
        return result

    async def run(self, urls: list[str]) -> MetadataRecord | BatchResult:
        """
        Extract a request's URLs.

        A single URL returns its record directly (or raises its error);
        several URLs return a BatchResult.

        Raises:
            InvalidBatchSizeError: If `urls` is empty or too long
            ExtractionError: If the single URL fails
        """
        validate_batch_size(len(urls))
        if len(urls) == 1:
            return await self.extract(urls[0])
        return await self.extract_batch(urls)

    async def close(self) -> None:
        """Release the fetcher."""
        await self._fetcher.close()

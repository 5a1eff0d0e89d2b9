"""Per-URL outcomes and the ordered batch envelope."""

from dataclasses import dataclass
from typing import Any

from metadata_party.exceptions import ExtractionError
from metadata_party.models.metadata import MetadataRecord


@dataclass(frozen=True)
class Success:
    """A URL that produced a metadata record."""

    index: int
    record: MetadataRecord

    @property
    def url(self) -> str:
        return self.record.url

    def to_payload(self) -> dict[str, Any]:
        return self.record.to_payload()


@dataclass(frozen=True)
class Failure:
    """A URL whose pipeline stopped with an error."""

    index: int
    url: str
    error: ExtractionError

    @property
    def kind(self) -> str:
        return self.error.kind

    def to_payload(self) -> dict[str, Any]:
        return {"url": self.url, "error": self.error.message}


Outcome = Success | Failure


@dataclass(frozen=True)
class BatchResult:
    """Outcomes of a batch, ordered by input position."""

    outcomes: list[Outcome]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def successful(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Success))

    @property
    def failed(self) -> int:
        return self.total - self.successful

    @classmethod
    def from_outcomes(cls, outcomes: list[Outcome]) -> "BatchResult":
        """
        Build a result from outcomes in any order.

        Each outcome is placed at its own index.

        Raises:
            ValueError: If the indexes are not exactly 0..n-1
        """
        ordered: list[Outcome | None] = [None] * len(outcomes)
        for outcome in outcomes:
            if not 0 <= outcome.index < len(ordered) or ordered[outcome.index] is not None:
                raise ValueError(f"Unexpected outcome index {outcome.index}")
            ordered[outcome.index] = outcome
        return cls(outcomes=[o for o in ordered if o is not None])

    def to_payload(self) -> dict[str, Any]:
        return {
            "results": [o.to_payload() for o in self.outcomes],
            "total": self.total,
        }

"""Pydantic models and outcome types for Metadata Party."""

from metadata_party.models.metadata import MetadataRecord, MetadataRequest
from metadata_party.models.outcome import BatchResult, Failure, Outcome, Success

__all__ = [
    "MetadataRecord",
    "MetadataRequest",
    "Outcome",
    "Success",
    "Failure",
    "BatchResult",
]

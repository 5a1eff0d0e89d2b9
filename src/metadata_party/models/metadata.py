"""Metadata-related Pydantic models."""

from typing import Any

from pydantic import BaseModel, Field


class MetadataRequest(BaseModel):
    """Request envelope accepted by the HTTP route and the MCP tool."""

    url: str | None = Field(default=None, description="Single URL to extract")
    urls: list[str] | None = Field(default=None, description="Batch of URLs to extract")

    model_config = {"extra": "ignore"}

    def targets(self) -> list[str]:
        """Return every requested URL, the single `url` first."""
        targets: list[str] = []
        if self.url:
            targets.append(self.url)
        targets.extend(self.urls or [])
        return targets


class MetadataRecord(BaseModel):
    """Link preview metadata extracted from one fetched page."""

    title: str | None = Field(default=None, description="Page title")
    description: str | None = Field(default=None, description="Page description")
    images: list[str] = Field(default_factory=list, description="Preview image URLs")
    site_names: list[str] = Field(
        default_factory=list,
        serialization_alias="sitename",
        description="og:site_name values in document order",
    )
    favicon: str | None = Field(default=None, description="Favicon URL")
    duration_ms: int = Field(
        ..., ge=0, serialization_alias="duration", description="Fetch and parse time"
    )
    domain: str = Field(..., description="Host (and port) of the requested URL")
    url: str = Field(..., description="The requested URL")

    model_config = {"extra": "ignore", "frozen": True}

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the public response keys."""
        return self.model_dump(by_alias=True)

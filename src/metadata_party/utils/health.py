"""Health check utilities for the server."""

from dataclasses import dataclass, field
from typing import Any

from metadata_party import __version__
from metadata_party.config import Settings, settings


@dataclass
class HealthStatus:
    """Health status of a component."""

    name: str
    healthy: bool
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)


class HealthChecker:
    """
    Health checker for the application.

    Checks various components and returns overall health status.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self._settings = config or settings

    async def check_fetch_limits(self) -> HealthStatus:
        """Check that the fetch limits can admit a request."""
        limits = {
            "request_timeout": self._settings.request_timeout,
            "max_redirects": self._settings.max_redirects,
            "max_body_bytes": self._settings.max_body_bytes,
        }
        problems = []
        if self._settings.request_timeout <= 0:
            problems.append("request_timeout must be positive")
        if self._settings.max_redirects < 0:
            problems.append("max_redirects must not be negative")
        if self._settings.max_body_bytes <= 0:
            problems.append("max_body_bytes must be positive")

        return HealthStatus(
            name="fetch_limits",
            healthy=not problems,
            message="; ".join(problems) or "Fetch limits configured",
            details=limits,
        )

    async def check_all(self) -> dict[str, Any]:
        """
        Run all health checks and return overall status.

        Returns:
            Dictionary with health status information
        """
        checks = [
            await self.check_fetch_limits(),
        ]

        all_healthy = all(check.healthy for check in checks)

        return {
            "healthy": all_healthy,
            "status": "healthy" if all_healthy else "unhealthy",
            "checks": {
                check.name: {
                    "healthy": check.healthy,
                    "message": check.message,
                    "details": check.details,
                }
                for check in checks
            },
            "version": __version__,
        }

    async def check_liveness(self) -> dict[str, Any]:
        """
        Check if the server is alive.

        This is a minimal check for Kubernetes liveness probes.
        """
        return {
            "alive": True,
            "status": "alive",
        }

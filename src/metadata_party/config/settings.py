"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via environment variables prefixed with METADATA_.
    For example, METADATA_DEBUG=true sets debug=True.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="METADATA_",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Server Settings ─────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS (comma-separated origins or "*")
    cors_origins: str = "*"

    def get_cors_origins(self) -> list[str]:
        """Get CORS origins as a list (parsed from comma-separated string)."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # ─── Fetch Limits ────────────────────────────────────────────────
    request_timeout: float = 30.0
    max_redirects: int = 10
    max_body_bytes: int = 10 * 1024 * 1024
    user_agent: str = "metadata.party/1.0 (+https://github.com/metadata-party/metadata-party)"
    accept_header: str = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

    # ─── HTTP Client Settings ────────────────────────────────────────
    max_connections: int = 100
    max_keepalive_connections: int = 20

    def get_request_headers(self) -> dict[str, str]:
        """Headers sent with every outbound fetch."""
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept_header,
        }


# Global settings instance
settings = Settings()

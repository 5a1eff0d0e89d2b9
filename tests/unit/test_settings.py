"""Unit tests for settings helpers."""

from metadata_party.config.settings import Settings


def test_settings_defaults():
    base = Settings()

    assert base.request_timeout == 30.0
    assert base.max_redirects == 10
    assert base.max_body_bytes == 10 * 1024 * 1024
    assert base.port == 8080


def test_settings_helpers():
    base = Settings()

    origins = base.model_copy(update={"cors_origins": "https://a.example, https://b.example,"})
    assert origins.get_cors_origins() == ["https://a.example", "https://b.example"]

    headers = base.get_request_headers()
    assert headers["User-Agent"].startswith("metadata.party/1.0")
    assert headers["Accept"].startswith("text/html")


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("METADATA_MAX_REDIRECTS", "3")
    monkeypatch.setenv("METADATA_DEBUG", "true")

    configured = Settings()

    assert configured.max_redirects == 3
    assert configured.debug is True

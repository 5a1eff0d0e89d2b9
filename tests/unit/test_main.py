"""Unit tests for __main__ entrypoint."""


def test_main_invokes_uvicorn(monkeypatch):
    """Ensure main configures structlog and calls uvicorn.run."""
    import structlog
    import uvicorn

    from metadata_party.__main__ import main
    from metadata_party.config import settings

    called = {"run": False, "configure": False}

    def fake_run(app, host, port, reload, log_level, access_log):  # noqa: ARG001
        called["run"] = True
        assert app == "metadata_party.app:app"
        assert host == settings.host
        assert port == settings.port

    def fake_configure(*args, **kwargs):  # noqa: ARG001
        called["configure"] = True

    monkeypatch.setattr(uvicorn, "run", fake_run)
    monkeypatch.setattr(structlog, "configure", fake_configure)

    main()

    assert called["run"] is True
    assert called["configure"] is True


def test_configure_logging_uses_json_outside_debug(monkeypatch):
    import structlog

    from metadata_party.__main__ import configure_logging
    from metadata_party.config import settings

    captured = {}

    def fake_configure(**kwargs):
        captured.update(kwargs)

    monkeypatch.setattr(settings, "debug", False)
    monkeypatch.setattr(structlog, "configure", fake_configure)

    configure_logging()

    assert isinstance(captured["processors"][-1], structlog.processors.JSONRenderer)


def test_module_main_executes(monkeypatch):
    """Ensure __main__ guard executes without errors."""
    import runpy

    import structlog
    import uvicorn

    monkeypatch.setattr(structlog, "configure", lambda *args, **kwargs: None)
    monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: None)

    runpy.run_module("metadata_party.__main__", run_name="__main__")

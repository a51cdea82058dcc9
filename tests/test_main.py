"""Tests for process startup and transport selection."""

import pytest

import main
from core.credentials import CREDENTIAL_NAMES


class _RecordingServer:
    def __init__(self, error=None):
        self.runs = 0
        self.error = error

    def run(self):
        self.runs += 1
        if self.error:
            raise self.error


@pytest.fixture
def env(monkeypatch):
    for name in CREDENTIAL_NAMES + ("MCP_TRANSPORT", "PORT", "HOST", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_no_credential_terminates_startup(env, caplog):
    with pytest.raises(SystemExit) as excinfo:
        main.main()

    assert excinfo.value.code == 1
    for name in CREDENTIAL_NAMES:
        assert name in caplog.text


def test_stdio_is_the_default(env):
    env.setenv("NOTION_TOKEN", "secret_x")
    server = _RecordingServer()
    env.setattr(main, "build_server", lambda gateway: server)

    main.main()

    assert server.runs == 1


def test_http_mode_serves_mcp_endpoint(env):
    env.setenv("NOTION_API_KEY", "secret_x")
    env.setenv("MCP_TRANSPORT", "http")
    env.setenv("PORT", "4321")
    served = {}
    env.setattr(main.uvicorn, "run", lambda app, **kwargs: served.update(app=app, **kwargs))

    main.main()

    assert served["host"] == "127.0.0.1"
    assert served["port"] == 4321
    assert "/mcp" in {getattr(route, "path", None) for route in served["app"].routes}


def test_transport_failure_exits_nonzero(env):
    env.setenv("NOTION_API_KEY", "secret_x")
    env.setattr(main, "build_server", lambda gateway: _RecordingServer(error=OSError("stdin closed")))

    with pytest.raises(SystemExit) as excinfo:
        main.main()
    assert excinfo.value.code == 1


def test_http_mode_passes_uvicorn_a_level_it_knows(env):
    env.setenv("NOTION_API_KEY", "secret_x")
    env.setenv("MCP_TRANSPORT", "http")
    env.setenv("LOG_LEVEL", "WARN")
    served = {}
    env.setattr(main.uvicorn, "run", lambda app, **kwargs: served.update(kwargs))

    main.main()

    assert served["log_level"] == "warning"

"""Tests for Notion API key resolution."""

import logging
import subprocess

import pytest

import core.credentials as credentials
from core.credentials import (
    CREDENTIAL_NAMES,
    CredentialSource,
    default_sources,
    read_registry_value,
    require_credential,
    resolve_credential,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in CREDENTIAL_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _static(label, value):
    return CredentialSource(label=label, fetch=lambda: value)


class TestResolve:

    def test_first_non_empty_source_wins(self):
        sources = [_static("A", None), _static("B", "   "), _static("C", "key-c"), _static("D", "key-d")]
        credential = resolve_credential(sources)
        assert credential.key == "key-c"
        assert credential.source == "C"

    def test_value_is_trimmed(self):
        assert resolve_credential([_static("A", "  secret_x \n")]).key == "secret_x"

    def test_nothing_found_is_none(self):
        assert resolve_credential([_static("A", None), _static("B", "")]) is None

    def test_key_is_not_in_repr(self):
        credential = resolve_credential([_static("A", "secret_value")])
        assert "secret_value" not in repr(credential)

    def test_environment_priority_order(self, clean_env):
        clean_env.setenv("NOTION_SECRET", "from-secret")
        clean_env.setenv("NOTION_TOKEN", "from-token")

        credential = resolve_credential(default_sources("linux"))

        assert credential.key == "from-token"
        assert credential.source == "NOTION_TOKEN"

    def test_primary_name_beats_everything(self, clean_env):
        for name in CREDENTIAL_NAMES:
            clean_env.setenv(name, f"value-{name}")
        assert resolve_credential(default_sources("linux")).source == "NOTION_API_KEY"


class TestPlatformSources:

    def test_posix_reads_environment(self):
        assert [s.label for s in default_sources("darwin")] == list(CREDENTIAL_NAMES)

    def test_windows_reads_user_registry(self):
        assert [s.label for s in default_sources("win32")] == [f"HKCU:{n}" for n in CREDENTIAL_NAMES]

    def test_windows_ignores_process_environment(self, clean_env):
        clean_env.setenv("NOTION_API_KEY", "from-env")
        clean_env.setattr(credentials, "read_registry_value", lambda name: None)
        assert resolve_credential(default_sources("win32")) is None

    def test_registry_output_is_parsed(self, monkeypatch):
        stdout = (
            "\r\nHKEY_CURRENT_USER\\Environment\r\n"
            "    NOTION_TOKEN    REG_SZ    secret_from_registry  \r\n\r\n"
        )

        def fake_run(cmd, **kwargs):
            assert cmd == ["reg", "query", r"HKCU\Environment", "/v", "NOTION_TOKEN"]
            return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")

        monkeypatch.setattr(credentials.subprocess, "run", fake_run)
        assert read_registry_value("NOTION_TOKEN") == "secret_from_registry"

    def test_missing_registry_value_is_none(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd)

        monkeypatch.setattr(credentials.subprocess, "run", fake_run)
        assert read_registry_value("NOTION_TOKEN") is None

    def test_missing_reg_binary_is_none(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError("reg")

        monkeypatch.setattr(credentials.subprocess, "run", fake_run)
        assert read_registry_value("NOTION_TOKEN") is None


class TestRequire:

    def test_exits_nonzero_and_names_every_source(self, clean_env, caplog):
        with caplog.at_level(logging.ERROR, logger="notion_mcp"):
            with pytest.raises(SystemExit) as excinfo:
                require_credential(default_sources("linux"))

        assert excinfo.value.code == 1
        for name in CREDENTIAL_NAMES:
            assert name in caplog.text

    def test_logs_source_not_key(self, clean_env, caplog):
        clean_env.setenv("NOTION_API_KEY", "secret_abc")
        with caplog.at_level(logging.INFO, logger="notion_mcp"):
            credential = require_credential(default_sources("linux"))

        assert credential.key == "secret_abc"
        assert "NOTION_API_KEY" in caplog.text
        assert "secret_abc" not in caplog.text

"""Tests for turboclient.config -- env and file based connection parameters."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from turboclient.config import (
    connection_parameters_from_env,
    get_log_level,
    load_connection_parameters,
    resolve_credential,
)
from turboclient.exceptions import ConfigurationError
from turboclient.logger import LogLevel
from turboclient.models import Role


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# resolve_credential
# ---------------------------------------------------------------------------


class TestResolveCredential:
    def test_env_source(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TURBO_SECRET", "secret123")
        assert resolve_credential("env:TURBO_SECRET") == "secret123"

    def test_env_source_missing_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR", raising=False)
        with pytest.raises(ConfigurationError, match="not set"):
            resolve_credential("env:NONEXISTENT_VAR")

    def test_file_source(self, tmp_path: Path) -> None:
        cred_file = tmp_path / "secret.txt"
        cred_file.write_text("  my-secret  \n", encoding="utf-8")
        assert resolve_credential(f"file:{cred_file}") == "my-secret"

    def test_file_source_missing_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            resolve_credential("file:/nonexistent/path/secret.txt")

    def test_literal_passes_through(self) -> None:
        assert resolve_credential("plain-value") == "plain-value"


# ---------------------------------------------------------------------------
# connection_parameters_from_env
# ---------------------------------------------------------------------------


class TestFromEnv:
    def test_login_credentials(self) -> None:
        params = connection_parameters_from_env(
            {
                "T8C_HOSTNAME": "turbo.example.com",
                "T8C_USERNAME": "administrator",
                "T8C_PASSWORD": "pa55word",
            }
        )
        assert params.hostname == "turbo.example.com"
        assert (params.username, params.password) == ("administrator", "pa55word")
        assert params.effective_base_path == "/api/v3"
        assert params.skip_verify is False
        assert params.oauth_creds.role is None

    def test_oauth_and_identity(self) -> None:
        params = connection_parameters_from_env(
            {
                "T8C_HOSTNAME": "turbo.example.com",
                "T8C_BASE_PATH": "/custom",
                "T8C_CLIENT_ID": "cid",
                "T8C_CLIENT_SECRET": "csecret",
                "T8C_ROLE": "observer",
                "T8C_API_ORIGIN": "terraform-provider",
                "T8C_API_VERSION": "1.2.0",
            }
        )
        assert params.oauth_creds.is_complete
        assert params.oauth_creds.role is Role.OBSERVER
        assert params.effective_base_path == "/custom"
        assert params.api_info.user_agent == "terraform-provider/1.2.0"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("", False)],
    )
    def test_skip_verify(self, value: str, expected: bool) -> None:
        params = connection_parameters_from_env(
            {"T8C_HOSTNAME": "h", "T8C_SKIP_VERIFY": value}
        )
        assert params.skip_verify is expected

    def test_missing_hostname(self) -> None:
        with pytest.raises(ConfigurationError, match="T8C_HOSTNAME"):
            connection_parameters_from_env({})

    def test_unknown_role(self) -> None:
        with pytest.raises(ConfigurationError, match="unrecognized Turbonomic role"):
            connection_parameters_from_env({"T8C_HOSTNAME": "h", "T8C_ROLE": "superuser"})

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("T8C_HOSTNAME", "from-env.example.com")
        assert connection_parameters_from_env().hostname == "from-env.example.com"


# ---------------------------------------------------------------------------
# load_connection_parameters
# ---------------------------------------------------------------------------


class TestLoadFile:
    def test_plain_file(self, tmp_path: Path) -> None:
        path = _write_json(
            tmp_path / "turbo.json",
            {"hostname": "turbo.example.com", "username": "u", "password": "p", "skip_verify": True},
        )
        params = load_connection_parameters(path)
        assert (params.username, params.password) == ("u", "p")
        assert params.skip_verify is True

    def test_secret_sources_are_resolved(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TURBO_CLIENT_SECRET", "from-env")
        password_file = tmp_path / "password"
        password_file.write_text("from-file\n", encoding="utf-8")
        path = _write_json(
            tmp_path / "turbo.json",
            {
                "hostname": "turbo.example.com",
                "username": "u",
                "password_source": f"file:{password_file}",
                "oauth_creds": {
                    "client_id": "cid",
                    "client_secret_source": "env:TURBO_CLIENT_SECRET",
                    "role": "ADVISOR",
                },
            },
        )

        params = load_connection_parameters(str(path))

        assert params.password == "from-file"
        assert params.oauth_creds.client_secret == "from-env"
        assert params.oauth_creds.role is Role.ADVISOR

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_connection_parameters(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "turbo.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid connection file"):
            load_connection_parameters(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "turbo.json", ["hostname"])
        with pytest.raises(ConfigurationError, match="expected a JSON object"):
            load_connection_parameters(path)

    def test_validation_error(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "turbo.json", {"username": "u"})
        with pytest.raises(ConfigurationError, match="Invalid connection parameters"):
            load_connection_parameters(path)


class TestLogLevel:
    def test_reads_t8c_log(self) -> None:
        assert get_log_level({"T8C_LOG": "ERROR"}) is LogLevel.ERROR

    def test_default_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("T8C_LOG", raising=False)
        assert get_log_level() is LogLevel.INFO

"""Tests for YAML config loading, env var resolution and overrides."""

import logging
import os

import pytest
from pydantic import ValidationError

from stamps_client.config import (
    DEFAULT_ENDPOINT,
    LoggingConfig,
    StampsConfig,
    configure_logging,
    load_config,
    resolve_env_vars,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's env and config files."""
    for key in list(os.environ):
        if key.startswith("STAMPS_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


class TestResolveEnvVars:
    def test_resolves_reference(self, monkeypatch):
        monkeypatch.setenv("MY_PASSWORD", "s3cret")
        assert resolve_env_vars("${MY_PASSWORD}") == "s3cret"

    def test_missing_var_is_empty(self):
        assert resolve_env_vars("id-${NOT_SET_ANYWHERE}") == "id-"

    def test_plain_string_unchanged(self):
        assert resolve_env_vars("plain") == "plain"


class TestDefaults:
    def test_default_config(self):
        config = StampsConfig()
        assert config.account.use_credentials is False
        assert config.transport.endpoint == DEFAULT_ENDPOINT
        assert config.transport.namespace_identifier == "tns"
        assert config.transport.tls_version == "TLSv1_2"
        assert config.transport.open_timeout == 60.0
        assert config.transport.log_messages is False

    def test_unsupported_tls_rejected(self):
        with pytest.raises(ValidationError):
            StampsConfig(transport={"tls_version": "TLSv1"})


class TestLoadConfig:
    """load_config() search order and overrides."""

    def test_no_file_returns_none(self):
        assert load_config() is None

    def test_explicit_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_loads_cwd_file(self, tmp_path):
        (tmp_path / "stamps.yaml").write_text(
            "account:\n"
            "  integration_id: integration-1\n"
            "  username: shipper\n"
            "transport:\n"
            "  read_timeout: 30\n"
            "  log_messages: true\n"
        )
        config = load_config()
        assert config.account.username == "shipper"
        assert config.transport.read_timeout == 30.0
        assert config.transport.log_messages is True

    def test_home_file_used_when_cwd_has_none(self, tmp_path):
        home_config = tmp_path / "home" / ".stamps" / "config.yaml"
        home_config.parent.mkdir(parents=True)
        home_config.write_text("account:\n  username: from-home\n")
        assert load_config().account.username == "from-home"

    def test_env_references_resolved(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SHIPPER_PASSWORD", "s3cret")
        path = tmp_path / "custom.yaml"
        path.write_text("account:\n  password: ${SHIPPER_PASSWORD}\n")
        assert load_config(str(path)).account.password == "s3cret"

    def test_env_overrides_win(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("account:\n  username: yaml-user\n")
        monkeypatch.setenv("STAMPS_ACCOUNT_USERNAME", "env-user")
        monkeypatch.setenv("STAMPS_ACCOUNT_USE_CREDENTIALS", "true")
        monkeypatch.setenv("STAMPS_TRANSPORT_OPEN_TIMEOUT", "15")
        config = load_config(str(path))
        assert config.account.username == "env-user"
        assert config.account.use_credentials is True
        assert config.transport.open_timeout == 15.0

    def test_numeric_override_kept_as_string_field(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("{}\n")
        monkeypatch.setenv("STAMPS_ACCOUNT_PASSWORD", "12345")
        assert load_config(str(path)).account.password == "12345"

    def test_unknown_sections_ignored(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("")
        monkeypatch.setenv("STAMPS_NOPE_KEY", "x")
        assert load_config(str(path)) == StampsConfig()


class TestConfigureLogging:
    def test_sets_package_level(self):
        configure_logging(LoggingConfig(level="debug"))
        assert logging.getLogger("stamps_client").level == logging.DEBUG
        configure_logging(LoggingConfig(level="warning"))
        assert logging.getLogger("stamps_client").level == logging.WARNING
        logging.getLogger("stamps_client").setLevel(logging.NOTSET)

"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gh_vault.config import VaultSettings, default_token_file, load_config


class TestVaultSettings:
    """Tests for VaultSettings."""

    def test_defaults(self, clean_env):
        config = VaultSettings()

        assert config.token_file == clean_env / "gh-vault" / "token"
        assert config.api_url == "https://api.github.com"
        assert config.log_level == "WARNING"
        assert config.validate_config() == []

    def test_default_token_file_without_xdg(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert default_token_file() == Path("~/.config/gh-vault/token").expanduser()

    def test_environment_overrides(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("GH_VAULT_TOKEN_FILE", str(tmp_path / "tok"))
        monkeypatch.setenv("GH_VAULT_LOG_LEVEL", "debug")

        config = VaultSettings()

        assert config.token_file == tmp_path / "tok"
        assert config.log_level == "DEBUG"

    def test_tilde_expanded(self, clean_env):
        config = VaultSettings(token_file="~/gh-token")
        assert config.token_file == Path("~/gh-token").expanduser()

    def test_plain_http_api_rejected(self, clean_env):
        with pytest.raises(ValidationError):
            VaultSettings(api_url="http://api.github.com")

    def test_unknown_log_level_rejected(self, clean_env):
        with pytest.raises(ValidationError):
            VaultSettings(log_level="chatty")

    def test_token_file_directory_reported(self, clean_env, tmp_path):
        config = VaultSettings(token_file=tmp_path)
        assert config.validate_config() == [f"Token file path is a directory: {tmp_path}"]


class TestLoadConfig:
    """Tests for load_config and YAML files."""

    def test_yaml_with_hyphenated_keys(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            f"token-file: {tmp_path / 'token'}\n"
            "request-timeout: 10\n"
        )

        config = load_config(config_file)

        assert config.token_file == tmp_path / "token"
        assert config.request_timeout == 10.0

    def test_environment_beats_yaml(self, clean_env, monkeypatch, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("log-level: info\n")
        monkeypatch.setenv("GH_VAULT_LOG_LEVEL", "error")

        assert load_config(config_file).log_level == "ERROR"

    def test_default_config_file_is_used(self, clean_env):
        config_dir = clean_env / "gh-vault"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("debug: true\n")

        assert load_config().debug is True

    def test_no_config_file(self, clean_env):
        assert load_config().debug is False

    def test_empty_yaml(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_config(config_file).api_url == "https://api.github.com"

    def test_missing_explicit_file(self, clean_env, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_non_mapping_yaml(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_config(config_file)

    def test_malformed_yaml(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("token-file: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(config_file)

    def test_empty_token_file_value(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("token-file:\n")
        with pytest.raises(ValidationError):
            load_config(config_file)

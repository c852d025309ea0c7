"""Tests for the gh-vault command line."""

import io
import logging

import pytest
import structlog

from gh_vault import cli

from conftest import CLASSIC_TOKEN, FINE_GRAINED_TOKEN


@pytest.fixture
def env(clean_env, monkeypatch, keyring_backend, tmp_path):
    """Isolated config dir, token file and in-memory keyring."""
    token_file = tmp_path / "state" / "token"
    monkeypatch.setenv("GH_VAULT_TOKEN_FILE", str(token_file))
    monkeypatch.setattr("keyring.get_keyring", lambda: keyring_backend)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield token_file
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def run_cli(monkeypatch, argv, stdin=""):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    return cli.main(argv)


class TestAuthCommands:
    """Tests for gh-vault auth subcommands."""

    def test_login_stores_in_keyring(self, env, monkeypatch, capsys, keyring_backend):
        code = run_cli(
            monkeypatch,
            ["auth", "login", "--with-token", "--no-verify"],
            stdin=FINE_GRAINED_TOKEN + "\n",
        )

        out = capsys.readouterr().out
        assert code == 0
        assert "Token type: fine-grained" in out
        assert "system keyring" in out
        assert FINE_GRAINED_TOKEN not in out
        assert list(keyring_backend.passwords.values()) == [FINE_GRAINED_TOKEN]
        assert not env.exists()

    def test_login_insecure_storage(self, env, monkeypatch, capsys, keyring_backend):
        code = run_cli(
            monkeypatch,
            ["auth", "login", "--with-token", "--no-verify", "--insecure-storage"],
            stdin=FINE_GRAINED_TOKEN + "\n",
        )

        assert code == 0
        assert env.read_text() == FINE_GRAINED_TOKEN + "\n"
        assert keyring_backend.passwords == {}

    def test_login_rejects_classic_token(self, env, monkeypatch, capsys, keyring_backend):
        code = run_cli(
            monkeypatch,
            ["auth", "login", "--with-token", "--no-verify"],
            stdin=CLASSIC_TOKEN + "\n",
        )

        err = capsys.readouterr().err
        assert code == 1
        assert "Classic personal access tokens" in err
        assert keyring_backend.passwords == {}

    def test_login_vault_failure_suggests_insecure_storage(
        self, env, monkeypatch, capsys, keyring_backend
    ):
        keyring_backend.fail_set = True

        code = run_cli(
            monkeypatch,
            ["auth", "login", "--with-token", "--no-verify"],
            stdin=FINE_GRAINED_TOKEN + "\n",
        )

        assert code == 1
        assert capsys.readouterr().err.count("--insecure-storage") == 1
        assert not env.exists()

    def test_login_empty_input_cancels(self, env, monkeypatch, capsys):
        code = run_cli(monkeypatch, ["auth", "login", "--with-token"], stdin="\n")

        assert code == 0
        assert "Cancelled." in capsys.readouterr().out

    def test_status_without_token(self, env, monkeypatch, capsys):
        code = run_cli(monkeypatch, ["auth", "status", "--no-verify"])

        assert code == 1
        assert "Run: gh-vault auth login" in capsys.readouterr().err

    def test_status_reports_file_tier(self, env, monkeypatch, capsys):
        env.parent.mkdir(parents=True)
        env.write_text(FINE_GRAINED_TOKEN + "\n")

        code = run_cli(monkeypatch, ["auth", "status", "--no-verify"])

        out = capsys.readouterr().out
        assert code == 0
        assert f"Stored in: {env}" in out
        assert FINE_GRAINED_TOKEN not in out

    def test_logout(self, env, monkeypatch, capsys, keyring_backend):
        run_cli(
            monkeypatch,
            ["auth", "login", "--with-token", "--no-verify"],
            stdin=FINE_GRAINED_TOKEN + "\n",
        )

        assert run_cli(monkeypatch, ["auth", "logout"]) == 0
        assert run_cli(monkeypatch, ["auth", "logout"]) == 0
        assert keyring_backend.passwords == {}
        assert "✓ Token removed" in capsys.readouterr().out

    def test_token_display_is_disabled(self, env, monkeypatch, capsys):
        code = run_cli(monkeypatch, ["auth", "token"])

        err = capsys.readouterr().err
        assert code == 1
        assert "Token display is disabled for security." in err
        assert "gh-vault auth status" in err

    def test_invalid_config_file(self, env, monkeypatch, capsys, tmp_path):
        code = run_cli(monkeypatch, ["--config", str(tmp_path / "missing.yaml"), "auth", "logout"])

        assert code == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_malformed_config_file(self, env, monkeypatch, capsys, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("token-file: [unclosed\n")

        code = run_cli(monkeypatch, ["--config", str(config_file), "auth", "logout"])

        assert code == 2
        assert "Invalid YAML" in capsys.readouterr().err

    def test_malformed_default_config_file(self, env, clean_env, monkeypatch, capsys):
        config_dir = clean_env / "gh-vault"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("token-file: [unclosed\n")

        assert run_cli(monkeypatch, ["auth", "logout"]) == 2

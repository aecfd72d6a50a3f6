"""Tests for CLI entrypoint behavior."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from framekit import __version__
from framekit.cli.main import app
from framekit.exceptions import AuthUnknownStatus, ChildProcessFailed

runner = CliRunner()


@pytest.fixture(autouse=True)
def _use_tmp_config(tmp_path, monkeypatch):
    config_path = tmp_path / ".framekit" / "config.json"
    monkeypatch.setattr("framekit.auth.credentials.get_config_path", lambda: config_path)
    monkeypatch.delenv("FRAMEKIT_TOKEN", raising=False)
    return config_path


def test_root_version_option():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"framekit {__version__}"


def test_version_subcommand():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"framekit {__version__}"


def test_logout_removes_key(_use_tmp_config):
    _use_tmp_config.parent.mkdir(parents=True)
    _use_tmp_config.write_text(json.dumps({"auth": {"id": "key-1", "key": "fk-key"}}))

    result = runner.invoke(app, ["logout"])

    assert result.exit_code == 0
    assert json.loads(_use_tmp_config.read_text()) == {}


def test_logout_when_logged_out():
    result = runner.invoke(app, ["logout"])
    assert result.exit_code == 0


def test_whoami_not_authenticated_exits_nonzero():
    result = runner.invoke(app, ["whoami"])
    assert result.exit_code == 1


def test_error_text_is_printed_literally():
    with patch("framekit.cli.commands.auth.run_login", side_effect=AuthUnknownStatus("[revoked]")):
        result = runner.invoke(app, ["login"])
    assert result.exit_code == 1
    assert "Received an unknown polling status [revoked]." in result.output


def test_bracketed_command_output_exits_cleanly():
    error = ChildProcessFailed("git init", 128, "fatal: cannot write [/tmp/x]")
    with patch("framekit.cli.commands.create.run_create", side_effect=error):
        result = runner.invoke(app, ["create"])
    assert result.exit_code == 1
    assert "fatal: cannot write [/tmp/x]" in result.output

"""Tests for the command line interface"""
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from prompt_relay.cli import cli
from prompt_relay.errors import RelayError, RelayErrorKind


@pytest.fixture
def runner(monkeypatch):
    for name in ("OLLAMA_URL", "DEFAULT_MODEL", "PORT", "HOST", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    with patch("prompt_relay.cli.load_dotenv"):
        yield CliRunner()


class TestServe:
    """Tests for `prompt-relay serve`"""

    def test_serve_runs_uvicorn(self, runner):
        with patch("prompt_relay.cli.uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["serve"], env={"PORT": "9000", "OLLAMA_URL": "http://gpu-box:11434"})

        assert result.exit_code == 0
        mock_run.assert_called_once()
        app = mock_run.call_args.args[0]
        kwargs = mock_run.call_args.kwargs
        assert kwargs["port"] == 9000
        assert kwargs["host"] == "0.0.0.0"
        assert app.state.settings.ollama_url == "http://gpu-box:11434"
        assert app.state.relay.default_model == "llama2"

    def test_serve_invalid_port(self, runner):
        with patch("prompt_relay.cli.uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["serve"], env={"PORT": "abc"})

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        mock_run.assert_not_called()


class TestComplete:
    """Tests for `prompt-relay complete`"""

    def test_complete_prints_answer(self, runner):
        with patch("prompt_relay.cli.OllamaClient") as mock_cls:
            relay = mock_cls.return_value.__enter__.return_value
            relay.complete.return_value = "hi there"

            result = runner.invoke(cli, ["complete", "hello", "--model", "mistral"])

        assert result.exit_code == 0
        assert result.output == "hi there\n"
        relay.complete.assert_called_once_with("hello", "mistral")

    def test_complete_default_model(self, runner):
        with patch("prompt_relay.cli.OllamaClient") as mock_cls:
            relay = mock_cls.return_value.__enter__.return_value
            relay.complete.return_value = "ok"

            runner.invoke(cli, ["complete", "hello"])

        relay.complete.assert_called_once_with("hello", "")

    def test_complete_error_exits_nonzero(self, runner):
        with patch("prompt_relay.cli.OllamaClient") as mock_cls:
            relay = mock_cls.return_value.__enter__.return_value
            relay.complete.side_effect = RelayError(RelayErrorKind.UPSTREAM_UNREACHABLE, "ollama request failed")

            result = runner.invoke(cli, ["complete", "hello"])

        assert result.exit_code == 1
        assert "ollama request failed" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output

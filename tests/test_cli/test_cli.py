"""Tests for CLI commands."""

import logging

import pytest
from click.testing import CliRunner

from dbgate.cli import _resolve_log_level, cli, simulate_load
from dbgate.concurrency.gate import ConcurrencyGate


@pytest.fixture
def runner():
    return CliRunner()


class TestCLIGroup:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "dbgate" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0


class TestConfigCommand:
    def test_shows_defaults(self, runner):
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        assert "Gate Settings" in result.output
        assert "concurrency_limit" in result.output
        assert "10" in result.output

    def test_env_override(self, runner, monkeypatch):
        monkeypatch.setenv("DB_CONCURRENCY_LIMIT", "37")
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        assert "37" in result.output

    def test_limit_option(self, runner):
        result = runner.invoke(cli, ["config", "--limit", "42"])
        assert result.exit_code == 0
        assert "42" in result.output

    def test_bad_log_level_falls_back(self, runner, monkeypatch):
        monkeypatch.setenv("DBGATE_LOG_LEVEL", "chatty")
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        assert "WARNING" in result.output


class TestSimulateCommand:
    def test_summary(self, runner):
        result = runner.invoke(
            cli, ["simulate", "--operations", "20", "--limit", "4", "--delay", "0"]
        )
        assert result.exit_code == 0
        assert "Simulation Summary" in result.output
        assert "Peak concurrency" in result.output
        assert "yes" in result.output

    def test_bad_log_level_env(self, runner, monkeypatch):
        monkeypatch.setenv("DBGATE_LOG_LEVEL", "verbose")
        result = runner.invoke(cli, ["simulate", "-n", "3", "--delay", "0"])
        assert result.exit_code == 0
        assert result.exception is None
        assert "Simulation Summary" in result.output

    def test_zero_limit_rejected(self, runner):
        result = runner.invoke(cli, ["simulate", "--limit", "0", "--delay", "0"])
        assert result.exit_code == 1

    def test_help(self, runner):
        result = runner.invoke(cli, ["simulate", "--help"])
        assert result.exit_code == 0
        assert "--fail-every" in result.output


class TestSimulateLoad:
    async def test_counts_and_peak(self):
        gate = ConcurrencyGate(3)
        result = await simulate_load(gate, 12, delay=0.001, fail_every=4)

        assert result.limit == 3
        assert result.succeeded == 9
        assert result.failed == 3
        assert result.peak_concurrency == 3
        assert result.fifo is True
        assert result.start_order == list(range(12))


class TestValidateConfigCommand:
    def test_valid(self, runner, tmp_path):
        path = tmp_path / "dbgate.yaml"
        path.write_text("concurrency_limit: 5\n")
        result = runner.invoke(cli, ["validate-config", str(path)])
        assert result.exit_code == 0
        assert "Valid config" in result.output
        assert "concurrency_limit=5" in result.output

    def test_invalid(self, runner, tmp_path):
        path = tmp_path / "dbgate.yaml"
        path.write_text("- not\n- a mapping\n")
        result = runner.invoke(cli, ["validate-config", str(path)])
        assert result.exit_code == 1

    def test_missing_file(self, runner):
        result = runner.invoke(cli, ["validate-config", "nonexistent.yaml"])
        assert result.exit_code != 0


class TestResolveLogLevel:
    def test_configured_level_used_without_flags(self):
        assert _resolve_log_level(0, "ERROR") == logging.ERROR
        assert _resolve_log_level(0, "debug") == logging.DEBUG

    def test_default_level(self):
        assert _resolve_log_level(0) == logging.WARNING

    def test_verbosity_wins(self):
        assert _resolve_log_level(1, "ERROR") == logging.INFO
        assert _resolve_log_level(2, "ERROR") == logging.DEBUG

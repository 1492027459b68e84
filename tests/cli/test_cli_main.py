"""Tests for the top-level ``mcpdock`` group."""

from pathlib import Path

from click.testing import CliRunner

from mcpdock import __version__
from mcpdock.cli import main


class TestMain:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        for name in ("setup", "run", "remove", "status", "health", "logs", "clean", "test"):
            assert name in result.output
        assert "fresh-start" in result.output

    def test_bad_config(self, tmp_path: Path) -> None:
        path = tmp_path / "mcpdock.yaml"
        path.write_text("container:\n  memory: lots\n")

        result = CliRunner().invoke(main, ["--config", str(path), "dockerfile"])

        assert result.exit_code == 1
        assert "Config error" in result.output

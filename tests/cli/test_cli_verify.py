"""Tests for ``mcpdock test``."""

from unittest.mock import MagicMock, patch

from mcpdock.cli_commands.verify import build_suites
from mcpdock.settings.models import ProjectSettings
from mcpdock.verify.checks import Check, CheckOutcome, CheckSuite


def _suite(name: str, *outcomes: CheckOutcome) -> CheckSuite:
    def make(outcome: CheckOutcome):
        async def run() -> CheckOutcome:
            return outcome

        return run

    return CheckSuite(
        name, [Check(f"{name} check {i}", make(o)) for i, o in enumerate(outcomes, start=1)]
    )


class TestVerifyCommand:
    def test_all_suites_pass(self, invoke) -> None:
        suites = [
            _suite("build", CheckOutcome.ok()),
            _suite("mcp", CheckOutcome.ok()),
            _suite("integration", CheckOutcome.ok()),
        ]
        with patch("mcpdock.cli_commands.verify.build_suites", return_value=suites) as mock_build:
            result = invoke("test")

        assert result.exit_code == 0, result.output
        assert mock_build.call_args.args[1] == ("build", "mcp", "integration")
        assert "All build tests passed" in result.output
        assert "All tests passed" in result.output

    def test_failure_stops_later_suites(self, invoke) -> None:
        suites = [
            _suite("build", CheckOutcome.ok(), CheckOutcome.fail("too big"), CheckOutcome.ok()),
            _suite("mcp", CheckOutcome.ok()),
        ]
        with patch("mcpdock.cli_commands.verify.build_suites", return_value=suites):
            result = invoke("test")

        assert result.exit_code == 1
        assert "build check 2 failed: too big" in result.output
        assert "build check 3" not in result.output
        assert "mcp" not in result.output

    def test_single_suite(self, invoke) -> None:
        with patch(
            "mcpdock.cli_commands.verify.build_suites",
            return_value=[_suite("mcp", CheckOutcome.ok())],
        ) as mock_build:
            result = invoke("test", "mcp")

        assert result.exit_code == 0
        assert mock_build.call_args.args[1] == ("mcp",)

    def test_unknown_suite(self, invoke) -> None:
        result = invoke("test", "bogus")
        assert result.exit_code == 2


class TestBuildSuites:
    def test_canonical_order(self, settings: ProjectSettings) -> None:
        with (
            patch("mcpdock.cli_commands._deps.make_docker", return_value=MagicMock()),
            patch("mcpdock.cli_commands._deps.make_registration_service", return_value=MagicMock()),
        ):
            suites = build_suites(settings, ("integration", "build"))

        assert [s.name for s in suites] == ["build", "integration"]
        assert len(suites[0].checks) == 5
        assert len(suites[1].checks) == 4

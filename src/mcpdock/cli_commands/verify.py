"""``mcpdock test`` — run the verification suites."""

from __future__ import annotations

import asyncio
import sys

import click

from mcpdock.cli_commands import _deps
from mcpdock.cli_commands._output import ConsoleReporter, console
from mcpdock.settings.models import ProjectSettings  # noqa: TC001
from mcpdock.verify.checks import CheckSuite, SuiteReport
from mcpdock.verify.suites import BuildSuite, IntegrationSuite, McpSuite

SUITE_NAMES = ("build", "mcp", "integration")


def build_suites(settings: ProjectSettings, names: tuple[str, ...]) -> list[CheckSuite]:
    """Instantiate the requested suites in their canonical order."""
    docker = _deps.make_docker()
    suites: list[CheckSuite] = []
    for name in SUITE_NAMES:
        if name not in names:
            continue
        if name == "build":
            suites.append(BuildSuite(docker, settings).suite())
        elif name == "mcp":
            suites.append(McpSuite(docker, settings).suite())
        else:
            suites.append(IntegrationSuite(_deps.make_registration_service(), settings).suite())
    return suites


@click.command("test")
@click.argument(
    "suite",
    type=click.Choice([*SUITE_NAMES, "all"]),
    default="all",
)
@click.pass_obj
def verify_cmd(settings: ProjectSettings, suite: str) -> None:
    """Run the SUITE verification checks (default: all, in order).

    Each suite stops at its first failing check; later suites are skipped.
    """
    names = SUITE_NAMES if suite == "all" else (suite,)
    reporter = ConsoleReporter()

    async def _run_all() -> list[SuiteReport]:
        reports: list[SuiteReport] = []
        for check_suite in build_suites(settings, names):
            report = await check_suite.run(reporter)
            reports.append(report)
            if not report.passed:
                break
        return reports

    reports = asyncio.run(_run_all())
    if not all(r.passed for r in reports):
        sys.exit(1)
    if len(reports) > 1:
        console.print("\n[green]✅ All tests passed[/green]")

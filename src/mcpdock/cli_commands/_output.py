"""Shared CLI output formatters."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mcpdock.protocols.mcp.models import MCPToolDef  # noqa: TC001
from mcpdock.registry.models import RegistrationStatus  # noqa: TC001
from mcpdock.runtime.models import ContainerSummary, ImageInfo  # noqa: TC001
from mcpdock.verify.checks import Check, CheckResult, SuiteReport  # noqa: TC001

console = Console()


def heading(message: str) -> None:
    console.print(f"[blue]{escape(message)}[/blue]")


def success(message: str) -> None:
    console.print(f"[green]✅ {escape(message)}[/green]")


def warning(message: str) -> None:
    console.print(f"[yellow]⚠️  {escape(message)}[/yellow]")


def failure(message: str) -> None:
    console.print(f"[red]❌ {escape(message)}[/red]")


def print_image(info: ImageInfo | None, reference: str) -> None:
    if info is None:
        failure(f"Image not found: {reference}")
        return
    table = Table(show_header=True)
    table.add_column("Image", style="cyan")
    table.add_column("Size")
    table.add_column("Architecture")
    table.add_row(info.reference, f"{info.size_mb:.1f}MB", f"{info.os}/{info.architecture}")
    console.print(table)


def print_containers(containers: list[ContainerSummary]) -> None:
    if not containers:
        success("No containers running")
        return
    table = Table(show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    for container in containers:
        table.add_row(container.name, container.status)
    console.print(table)


def print_registration(status: RegistrationStatus) -> None:
    if not status.registered:
        failure(f"MCP not registered: {status.name}")
        return
    if status.connected:
        state = "[green]connected[/green]"
    else:
        state = f"[red]{escape(status.status or 'not connected')}[/red]"
    console.print(f"  [cyan]{escape(status.name)}[/cyan]: {escape(status.command)} ({state})")
    if status.count > 1:
        warning(f"{status.count} registrations share the name {status.name}")


def print_tools_table(tools: list[MCPToolDef]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for tool in tools:
        table.add_row(tool.name, _truncate(tool.description))

    console.print(table)


class ConsoleReporter:
    """Prints suite progress as each check runs.

    Satisfies the :class:`~mcpdock.verify.checks.SuiteReporter` protocol.
    """

    def suite_started(self, name: str, total: int) -> None:
        console.print(f"[yellow]🧪 Running {escape(name)} tests ({total} checks)...[/yellow]")

    def check_started(self, index: int, check: Check) -> None:
        console.print(f"\n[yellow]Test {index}: {escape(check.title)}[/yellow]")

    def check_finished(self, index: int, result: CheckResult) -> None:
        detail = f": {result.detail}" if result.detail else ""
        if result.passed:
            success(f"{result.title}{detail}")
        else:
            failure(f"{result.title} failed{detail}")

    def suite_finished(self, report: SuiteReport) -> None:
        if report.passed:
            console.print(f"\n[green]🎉 All {escape(report.name)} tests passed![/green]")


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."

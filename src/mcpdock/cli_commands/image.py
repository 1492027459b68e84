"""``mcpdock setup`` and ``mcpdock dockerfile`` — the server image."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from mcpdock.cli_commands import _actions
from mcpdock.cli_commands._output import console, failure, success
from mcpdock.runtime.errors import RuntimeToolError
from mcpdock.settings.dockerfile import render_dockerfile
from mcpdock.settings.models import ProjectSettings  # noqa: TC001


@click.command()
@click.pass_obj
def setup(settings: ProjectSettings) -> None:
    """Build the Docker image."""
    try:
        asyncio.run(_actions.setup_image(settings))
    except RuntimeToolError as exc:
        failure(str(exc))
        sys.exit(1)


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to a file instead of stdout.",
)
@click.pass_obj
def dockerfile(settings: ProjectSettings, output: Path | None) -> None:
    """Print the Dockerfile the image is built from."""
    text = render_dockerfile(settings.image)
    if output is None:
        console.print(text, end="", markup=False, highlight=False)
        return
    output.write_text(text, encoding="utf-8")
    success(f"Wrote {output}")

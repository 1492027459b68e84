"""Fixtures wiring the CLI to fake docker and claude adapters."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner, Result

from mcpdock.cli import main
from mcpdock.registry.service import RegistrationService
from mcpdock.runtime.docker import DockerCLI
from mcpdock.runtime.models import ImageInfo


@pytest.fixture
def docker() -> Iterator[MagicMock]:
    mock = MagicMock(spec=DockerCLI)
    mock.inspect_image.return_value = ImageInfo(
        reference="context7-mcp:1.0", size_bytes=180_000_000, architecture="arm64"
    )
    mock.containers_for_image.return_value = []
    mock.stop.return_value = True
    mock.remove_container.return_value = True
    mock.remove_image.return_value = True
    mock.interactive_command.side_effect = lambda image, args=(): [
        "docker", "run", "-i", "--rm", image, *args
    ]
    with patch("mcpdock.cli_commands._deps.make_docker", return_value=mock):
        yield mock


@pytest.fixture
def registry(fake_registrar) -> Iterator:
    service = RegistrationService(fake_registrar)
    with patch("mcpdock.cli_commands._deps.make_registration_service", return_value=service):
        yield fake_registrar


@pytest.fixture
def invoke(config_file: Path):
    """Run the CLI against the temporary project file."""
    runner = CliRunner()

    def _invoke(*args: str) -> Result:
        return runner.invoke(main, ["--config", str(config_file), *args])

    return _invoke

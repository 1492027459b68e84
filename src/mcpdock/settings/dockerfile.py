"""Dockerfile rendering for the server image.

The image is a thin layer over a Node base: the MCP package is installed
globally, a system account owns the working directory, and the package's
executable is the entry point.  Nothing is copied from a build context, so the
rendered text can be piped straight into ``docker build -``.
"""

from __future__ import annotations

import json

from mcpdock.settings.models import ImageSettings


def render_dockerfile(image: ImageSettings) -> str:
    """Return the Dockerfile text for *image*."""
    lines: list[str] = [
        f"# Platforms: {', '.join(image.platforms)}" if image.platforms else "",
        f"FROM {image.base_image}",
        "",
    ]
    for key, value in image.labels.items():
        lines.append(f"LABEL {key}={json.dumps(value)}")
    user = image.user
    lines += [
        "",
        f"WORKDIR {image.workdir}",
        "",
        f"RUN addgroup -S {user} && adduser -S {user} -G {user}",
        f"RUN npm install -g --omit=dev {image.package}",
        f"RUN chown -R {user}:{user} {image.workdir}",
        f"USER {user}",
        "",
        "HEALTHCHECK --interval=30s --timeout=5s --start-period=10s --retries=3 \\",
        f"  CMD {image.executable} --help > /dev/null || exit 1",
        "",
        f"ENTRYPOINT {json.dumps([image.executable])}",
        f"CMD {json.dumps(image.default_args)}",
    ]
    return "\n".join(lines).lstrip("\n") + "\n"

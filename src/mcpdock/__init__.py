"""mcpdock — run a documentation MCP server in Docker and register it with Claude."""

from __future__ import annotations

__version__ = "1.0.0"

"""Entry point to run the MCP server over stdio.

Used by MCP clients that launch the server as a subprocess.

Example:
    OPENAI_API_KEY=sk-... python -m assistants_mcp.mcp.server_runner

Then send JSON-RPC messages (one per line) to stdin; read responses from stdout.
Logs go to stderr.
"""

from __future__ import annotations

import asyncio
import contextlib
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assistants_mcp.config import Settings


async def serve(settings: Settings | None = None) -> None:
    """Build the context from ``settings`` (or the environment) and serve stdio until EOF."""
    from assistants_mcp.context import build_context
    from assistants_mcp.mcp.server import MCPServer

    context = await build_context(settings)
    try:
        await MCPServer(context).run_stdio()
    finally:
        await context.aclose()


def main() -> None:
    """Run the assistants MCP server on stdio."""
    from assistants_mcp.errors import ConfigurationError
    from assistants_mcp.observability import configure_logging

    configure_logging()
    exit_code = 0
    try:
        with contextlib.suppress(BrokenPipeError, KeyboardInterrupt):
            asyncio.run(serve())
    except (ConfigurationError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

"""Command-line interface for the assistants MCP server.

Example:
    >>> # From terminal:
    >>> # assistants-mcp --version
    >>> # assistants-mcp serve                      # stdio, for MCP clients
    >>> # assistants-mcp serve --transport http --port 8000
    >>> # assistants-mcp tools --json
    >>> # assistants-mcp resources
    >>> # assistants-mcp prompts
"""

import asyncio
import contextlib
import json
from enum import Enum
from typing import Annotated, Optional

import typer

from assistants_mcp import __version__
from assistants_mcp.catalog import PromptCatalog, ResourceCatalog
from assistants_mcp.config import Settings
from assistants_mcp.errors import ConfigurationError
from assistants_mcp.observability import configure_logging
from assistants_mcp.tools import TOOL_DEFINITIONS

app = typer.Typer(help="OpenAI Assistants MCP server.")


class Transport(str, Enum):
    STDIO = "stdio"
    HTTP = "http"


def _version_callback(value: bool) -> None:
    """Print the version and exit when requested."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Show the server version and exit.",
    callback=_version_callback,
    is_eager=True,
)


@app.callback()
def cli(version: bool = VERSION_OPTION) -> None:
    """Assistants MCP CLI entrypoint."""


def _load_settings(
    host: Optional[str], port: Optional[int], provider: Optional[str]
) -> Settings:
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid environment configuration: {exc}") from exc
    overrides = {
        key: value
        for key, value in (("host", host), ("port", port), ("default_provider", provider))
        if value is not None
    }
    return settings.model_copy(update=overrides) if overrides else settings


@app.command("serve")
def serve(
    transport: Annotated[
        Transport, typer.Option("--transport", "-t", help="Transport to serve on.")
    ] = Transport.STDIO,
    host: Annotated[
        Optional[str], typer.Option("--host", help="HTTP bind host (default: from env).")
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", min=1, max=65535, help="HTTP bind port (default: from env)."),
    ] = None,
    provider: Annotated[
        Optional[str], typer.Option("--provider", "-p", help="Default provider name.")
    ] = None,
) -> None:
    """Run the MCP server on stdio or HTTP."""
    settings = _load_settings(host, port, provider)
    configure_logging()

    try:
        if transport is Transport.STDIO:
            from assistants_mcp.mcp.server_runner import serve as serve_stdio

            with contextlib.suppress(BrokenPipeError, KeyboardInterrupt):
                asyncio.run(serve_stdio(settings))
        else:
            import uvicorn

            from assistants_mcp.transport.http import create_app

            uvicorn.run(
                create_app(settings=settings),
                host=settings.host,
                port=settings.port,
                log_config=None,
            )
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc.message}", err=True)
        raise typer.Exit(1) from exc


@app.command("tools")
def list_tools(
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the full tool definitions as JSON.")
    ] = False,
) -> None:
    """List the tool catalog."""
    if as_json:
        payload = [tool.model_dump(by_alias=True, exclude_none=True) for tool in TOOL_DEFINITIONS]
        typer.echo(json.dumps(payload, indent=2))
        return
    for tool in TOOL_DEFINITIONS:
        typer.echo(f"{tool.name:<24} [{tool.category}] {tool.title}")


@app.command("resources")
def list_resources() -> None:
    """List resource URIs and their names."""
    for resource in ResourceCatalog().list():
        typer.echo(f"{resource.uri:<45} {resource.name}")


@app.command("prompts")
def list_prompts() -> None:
    """List prompt templates and their arguments."""
    for prompt in PromptCatalog().list():
        args = ", ".join(
            f"{arg.name}{'' if arg.required else '?'}" for arg in prompt.arguments
        )
        typer.echo(f"{prompt.name:<28} {prompt.title} ({args})")


def main() -> None:
    """Run the assistants MCP CLI."""
    app()


if __name__ == "__main__":
    main()

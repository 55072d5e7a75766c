"""MCP server exposing the GitLab REST API as tools."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import sys

import click
from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default=None,
    help="MCP transport type (default: sse when USE_SSE=true, otherwise stdio)",
)
@click.option("--port", type=int, default=None, help="Port for HTTP transports (default: PORT or 3000)")
@click.option("--host", default="127.0.0.1", help="Host for HTTP transports")
@click.option("--gitlab-api-url", default=None, help="GitLab API base URL, including /api/v4")
@click.option("--token", default=None, help="GitLab personal access token")
@click.option("--read-only", is_flag=True, help="Disable write operations")
def main(
    transport: str | None,
    port: int | None,
    host: str,
    gitlab_api_url: str | None,
    token: str | None,
    read_only: bool,
) -> None:
    """Run the GitLab MCP server."""
    load_dotenv()

    from .config import GitLabConfig

    config = GitLabConfig.from_env()
    overrides = {
        "api_url": gitlab_api_url.rstrip("/") if gitlab_api_url else None,
        "token": token,
        "read_only": True if read_only else None,
        "port": port,
    }
    config = dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(level=config.log_level, stream=sys.stderr, format=LOG_FORMAT)
    logger = logging.getLogger(__name__)

    try:
        config.validate()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    from .servers.gitlab import create_server

    mcp = create_server(config)
    transport = transport or config.transport

    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs["host"] = host
        run_kwargs["port"] = config.port

    logger.info(
        "Starting GitLab MCP server (transport=%s, read_only=%s, api_url=%s)",
        transport,
        config.read_only,
        config.api_url,
    )
    asyncio.run(mcp.run_async(show_banner=False, **run_kwargs))


if __name__ == "__main__":
    main()

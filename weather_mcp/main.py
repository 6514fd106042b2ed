"""Entry point for the weather MCP server."""

from __future__ import annotations

import os
import sys
from typing import Optional

import click
from fastmcp import FastMCP

from . import claude_config, tools
from .config import load_settings, parse_port
from .log import log_and_print

SERVER_TITLE = "Weather Data Fetcher"


def create_app(provider: Optional[tools.WeatherProvider] = None) -> FastMCP:
    """Instantiate the MCP server and register available tools."""
    mcp = FastMCP(SERVER_TITLE)
    (get_weather_by_city,) = tools.create_weather_tools(provider)
    mcp.tool(name=tools.TOOL_NAME)(get_weather_by_city)
    return mcp


def register_with_claude(name: str, config_path: Optional[str] = None, log_file: Optional[str] = None) -> bool:
    """Advertise this server to the desktop app.

    Returns False when startup must abort. Recoverable failures are logged and
    reported as success so the server still comes up.
    """
    entry = claude_config.build_server_entry()
    result = claude_config.register_server(name, entry, config_path)
    if result.ok:
        log_and_print(f'✅ Updated "{name}" in {result.path}', log_file)
        return True
    if result.fatal:
        log_and_print(f"❌ {result.error}", log_file)
        return False
    log_and_print(f"⚠️ Could not register \"{name}\": {result.error}", log_file)
    log_and_print("Continuing without registration.", log_file)
    return True


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    show_default=True,
    help="Transport to serve MCP requests on.",
)
@click.option("--port", type=click.IntRange(1, 65535), default=None, help="Port for the http transport (default: $PORT or 3000).")
@click.option(
    "--no-register",
    is_flag=True,
    help="Skip updating the Claude desktop config (also WEATHER_MCP_REGISTER=false).",
)
@click.option(
    "--config-path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Claude desktop config file to update instead of the platform default.",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also append log lines to this file.")
def main(transport, port, no_register, config_path, log_file):
    """Run the weather MCP server."""
    settings = load_settings()
    log_file = log_file or settings.log_file
    if log_file:
        log_file = os.path.abspath(log_file)
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
    config_path = config_path or settings.claude_config_path

    if settings.register and not no_register and not register_with_claude(settings.server_name, config_path, log_file):
        sys.exit(1)

    app = create_app()
    if transport == "http":
        if port is None:
            try:
                port = parse_port(settings.port)
            except ValueError as e:
                raise click.BadParameter(str(e), param_hint="PORT")
        log_and_print(f"🌦️ Weather MCP running on http://localhost:{port}", log_file)
        app.run("streamable-http", host="127.0.0.1", port=port)
    else:
        log_and_print("🌦️ Weather MCP running on stdio", log_file)
        app.run("stdio")


if __name__ == "__main__":
    main()

"""javadc command line - start the MCP Java decompiler server.

Usage:
    javadc                      stdio transport (for MCP clients)
    javadc --http --port 3000   streamable HTTP transport at http://HOST:PORT/mcp

Environment:
- JAVADC_CFR_JAR: path to the CFR jar (default ./cfr.jar)
- JAVADC_JVM_PATH: explicit libjvm path (default: JPype's default JVM)
- JAVADC_HOST / JAVADC_PORT: HTTP bind host/port
- JAVADC_DEBUG: enable debug logging
- CLASSPATH (or the variable named by JAVADC_CLASSPATH_ENV): package lookup fallback
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

from pathlib import Path
from typing import TYPE_CHECKING

import click

from javadc_cli import __version__
from javadc_cli.config import ConfigManager
from javadc_cli.mcp_server import PythonMcpServer, ServerConfig
from javadc_cli.mcp_utils.debug_logger import DebugLogger
from javadc_cli.service import DecompilerService

if TYPE_CHECKING:
    from types import FrameType

logger = logging.getLogger(__name__)

BANNER = """
---------------------------------------------
MCP Java Decompiler Server
---------------------------------------------
Model Context Protocol (MCP) server that
decompiles Java bytecode into readable source
---------------------------------------------
"""


def configure_logging(verbose: bool) -> None:
    """Log to stderr only; stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    for noisy in ("httpx", "httpcore", "anyio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _install_signal_handlers() -> None:
    def _shutdown(signum: int, frame: FrameType | None) -> None:
        sys.stderr.write("\nShutting down MCP Java Decompiler server...\n")
        sys.exit(0)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)


def build_server(config: ConfigManager) -> PythonMcpServer:
    service = DecompilerService.from_config(config)
    server_config = ServerConfig(
        version=__version__,
        host=config.get_server_host(),
        port=config.get_server_port(),
    )
    return PythonMcpServer(service, server_config)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--http", "use_http", is_flag=True, help="Serve streamable HTTP instead of stdio")
@click.option("--port", type=int, default=None, help="HTTP port (default: $JAVADC_PORT or 3000)")
@click.option("--host", default=None, help="HTTP bind host (default: $JAVADC_HOST or 127.0.0.1)")
@click.option("--config", "config_file", type=click.Path(dir_okay=False, path_type=Path), default=None, help="JSON configuration file")
@click.option("--cfr-jar", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Path to the CFR jar")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, "--version", "-V")
def main(
    use_http: bool,
    port: int | None,
    host: str | None,
    config_file: Path | None,
    cfr_jar: Path | None,
    verbose: bool,
) -> None:
    """MCP server that decompiles Java .class and .jar files."""
    config = ConfigManager(config_file)
    if verbose:
        DebugLogger.set_debug_enabled(True)
    configure_logging(verbose or config.is_debug_mode())

    try:
        if port is not None:
            config.set_server_port(port, persist=False)
        if host is not None:
            config.set_server_host(host, persist=False)
        if cfr_jar is not None:
            config.set_cfr_jar_path(cfr_jar, persist=False)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    sys.stderr.write(BANNER)
    if use_http:
        sys.stderr.write(f"Starting in HTTP mode on port {config.get_server_port()}...\n")
        sys.stderr.write(f"Server will be available at: http://{config.get_server_host()}:{config.get_server_port()}/mcp\n")
    else:
        sys.stderr.write("Starting in stdio mode...\n")
        sys.stderr.write("Use this mode when connecting through an MCP client\n")

    _install_signal_handlers()
    server = build_server(config)

    try:
        if use_http:
            server.run_http()
        else:
            asyncio.run(server.run_stdio())
    except KeyboardInterrupt:
        sys.stderr.write("\nShutting down MCP Java Decompiler server...\n")
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

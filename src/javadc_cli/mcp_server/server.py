"""Python MCP Server implementation.

One MCP ``Server`` exposing the decompiler tools, reachable over stdio or over
streamable HTTP (FastAPI app served by uvicorn).
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time

from contextlib import asynccontextmanager
from typing import Any

from anyio import BrokenResourceError, ClosedResourceError
from fastapi import FastAPI
from mcp import types
from mcp.server import Server as MCPServer
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from pydantic import BaseModel

from javadc_cli.mcp_server.providers import DecompilerToolProvider
from javadc_cli.mcp_server.session_context import CURRENT_MCP_SESSION_ID
from javadc_cli.mcp_server.tool_providers import ToolProviderManager
from javadc_cli.mcp_utils.debug_logger import DebugLogger
from javadc_cli.service import DecompilerService

logger = logging.getLogger(__name__)

MCP_PATH = "/mcp"


class ServerConfig(BaseModel):
    """Configuration for the MCP server."""

    name: str = "javadc"
    version: str = "1.1.5"
    description: str = "MCP server for decompiling Java class files"
    host: str = "127.0.0.1"
    port: int = 3000


class _SessionContextASGI:
    """Binds the ``mcp-session-id`` header to CURRENT_MCP_SESSION_ID for the request."""

    def __init__(self, inner_app):
        self._inner_app = inner_app

    async def __call__(self, scope, receive, send):
        session_id = "default"
        if scope.get("type") == "http":
            for key_b, value_b in scope.get("headers", []):
                if key_b.decode("latin1").lower() == "mcp-session-id":
                    value = value_b.decode("latin1").strip()
                    if value:
                        session_id = value
                    break

        token = CURRENT_MCP_SESSION_ID.set(session_id)
        try:
            await self._inner_app(scope, receive, send)
        finally:
            CURRENT_MCP_SESSION_ID.reset(token)


class PythonMcpServer:
    """MCP server exposing decompile-from-path/-package/-jar."""

    def __init__(
        self,
        service: DecompilerService,
        config: ServerConfig | None = None,
    ) -> None:
        self.config: ServerConfig = ServerConfig() if config is None else config

        self.tool_providers: ToolProviderManager = ToolProviderManager()
        self.tool_providers.register(DecompilerToolProvider(service))
        self.mcp_server: MCPServer = self._create_mcp_server()

        self._running: bool = False
        self._uvicorn_server = None
        self._server_thread: threading.Thread | None = None
        self._session_manager = StreamableHTTPSessionManager(
            app=self.mcp_server,
            json_response=True,
            stateless=False,
        )

        self.app: FastAPI = FastAPI(title=self.config.name, version=self.config.version, lifespan=self._lifespan)
        self._setup_routes()

    def _create_mcp_server(self) -> MCPServer:
        server = MCPServer(name=self.config.name, version=self.config.version, instructions=self.config.description)

        @server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return self.tool_providers.list_tools()

        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            """Call a tool by name.

            Input validation is disabled because argument names are matched
            case- and separator-insensitively before dispatch; the SDK's schema
            validation would reject those variants.
            """
            return await self.tool_providers.call_tool(name, arguments)

        return server

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        async with self._session_manager.run():
            yield

    def _setup_routes(self) -> None:
        self.app.add_route(
            MCP_PATH,
            _SessionContextASGI(self._session_manager.handle_request),
            methods=["GET", "POST", "DELETE"],
        )

        @self.app.get("/health")
        async def health_check() -> dict[str, Any]:
            return {
                "status": "healthy",
                "server": self.config.name,
                "version": self.config.version,
                "tools": [tool.name for tool in self.tool_providers.list_tools()],
            }

    # ------------------------------------------------------------------
    # stdio transport
    # ------------------------------------------------------------------

    async def run_stdio(self) -> None:
        """Serve MCP over stdin/stdout until the client disconnects."""
        logger.info("MCP Java Decompiler server running in stdio mode")
        try:
            async with stdio_server() as (stdio_read, stdio_write):
                await self.mcp_server.run(
                    stdio_read,
                    stdio_write,
                    self.mcp_server.create_initialization_options(),
                )
        except ClosedResourceError:
            logger.info("Client disconnected")
        except BrokenResourceError:
            logger.info("Client connection broken - disconnecting")
        finally:
            self.tool_providers.cleanup()

    # ------------------------------------------------------------------
    # HTTP transport
    # ------------------------------------------------------------------

    def _build_uvicorn_server(self):
        import uvicorn

        config = uvicorn.Config(app=self.app, host=self.config.host, port=self.config.port, log_level="info")
        return uvicorn.Server(config)

    def run_http(self) -> None:
        """Serve MCP over streamable HTTP in the foreground."""
        self._uvicorn_server = self._build_uvicorn_server()
        self._running = True
        logger.info(f"MCP Java Decompiler server listening on http://{self.config.host}:{self.config.port}{MCP_PATH}")
        try:
            asyncio.run(self._uvicorn_server.serve())
        finally:
            self._running = False
            self.tool_providers.cleanup()

    def start(self, timeout: float = 10.0) -> int:
        """Serve HTTP from a background thread; returns once /health answers."""
        if self._running:
            logger.warning("Server is already running")
            return self.config.port

        self._uvicorn_server = self._build_uvicorn_server()
        self._running = True
        DebugLogger.debug_tool_execution(self, "server_startup", "START", f"Starting server on {self.config.host}:{self.config.port}")

        self._server_thread = threading.Thread(target=self._run_server, daemon=True)
        self._server_thread.start()

        start_time = time.time()
        while not self._is_server_ready():
            if not self._running or time.time() - start_time > timeout:
                self.stop()
                raise RuntimeError("Server failed to start within timeout")
            time.sleep(0.1)

        logger.info(f"MCP server started on {self.config.host}:{self.config.port}")
        return self.config.port

    def _run_server(self) -> None:
        try:
            asyncio.run(self._uvicorn_server.serve())
        except Exception as e:
            logger.error(f"Server error: {e}")
        finally:
            self._running = False

    def _is_server_ready(self) -> bool:
        if not self._running:
            return False

        import httpx

        try:
            with httpx.Client() as client:
                response = client.get(f"http://{self.config.host}:{self.config.port}/health", timeout=1.0)
                return response.status_code == 200
        except httpx.HTTPError:
            return False

    def stop(self) -> None:
        """Stop a server started with ``start()``."""
        if self._uvicorn_server is not None:
            self._uvicorn_server.should_exit = True

        if self._server_thread is not None and self._server_thread.is_alive():
            self._server_thread.join(timeout=5.0)
        self._server_thread = None

        self._running = False
        self.tool_providers.cleanup()
        logger.info("MCP server stopped")

    def is_running(self) -> bool:
        return self._running and self._is_server_ready()

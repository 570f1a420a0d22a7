"""MCP server for javadc: tool providers plus stdio and streamable-HTTP transports."""

from .server import PythonMcpServer, ServerConfig
from .tool_providers import ToolProvider, ToolProviderManager

__all__ = [
    "PythonMcpServer",
    "ServerConfig",
    "ToolProvider",
    "ToolProviderManager",
]

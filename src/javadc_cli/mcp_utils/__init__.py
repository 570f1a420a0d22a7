"""Shared helpers for the javadc MCP server."""

from .debug_logger import DebugLogger

__all__ = [
    "DebugLogger",
]

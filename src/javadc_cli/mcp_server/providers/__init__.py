"""Tool providers for the javadc MCP server."""

from .decompiler import DecompilerToolProvider

__all__ = [
    "DecompilerToolProvider",
]

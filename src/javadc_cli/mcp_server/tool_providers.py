"""Base ToolProvider with centralized normalization, dispatch, and manager.

Flow:
  1. MCP Server -> ToolProviderManager.call_tool(name, arguments)
  2. Manager resolves ``name`` to a canonical tool and its owning ToolProvider
  3. Provider.call_tool() normalizes ALL argument keys, dispatches to handler
  4. Handler reads already-normalized keys with the ``_get_*`` helpers

Every exception raised by a handler becomes a single ``Error: <message>``
text block; nothing propagates to the transport.
"""

from __future__ import annotations

import logging

from typing import Any

from mcp import types

from javadc_cli.errors import MissingParameter
from javadc_cli.mcp_server.session_context import get_current_mcp_session_id
from javadc_cli.mcp_utils.debug_logger import DebugLogger
from javadc_cli.registry import normalize_identifier, resolve_tool_name

logger = logging.getLogger(__name__)

n = normalize_identifier  # short alias used throughout providers


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------


def create_text_response(text: str) -> list[types.TextContent]:
    """Create a single-block MCP text response."""
    return [types.TextContent(type="text", text=text)]


def create_error_response(error: str | Exception) -> list[types.TextContent]:
    """Create an MCP error response: one text block prefixed with ``Error: ``."""
    msg = str(error) if isinstance(error, Exception) else error
    return create_text_response(f"Error: {msg}")


# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------


def _coerce_list(v: Any) -> list:
    """Coerce to list.  Handles: list, tuple, path-list/comma-separated string, scalar."""
    if isinstance(v, list):
        return v
    if isinstance(v, tuple):
        return list(v)
    if isinstance(v, str):
        if not v.strip():
            return []
        if "," in v:
            return [s.strip() for s in v.split(",") if s.strip()]
    return [v]


# ---------------------------------------------------------------------------
# Base ToolProvider
# ---------------------------------------------------------------------------


class ToolProvider:
    """Base class for MCP tool providers with centralized normalization.

    Subclasses populate **HANDLERS**: ``{normalized_tool_name: "method_name"}``.
    """

    HANDLERS: dict[str, str] = {}

    def list_tools(self) -> list[types.Tool]:
        return []

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None,
    ) -> list[types.TextContent]:
        """Normalize name + args, dispatch to handler, catch errors."""
        resolved_name = resolve_tool_name(name) or name
        handler_method_name = self.HANDLERS.get(n(resolved_name))
        if handler_method_name is None:
            return create_error_response(f"Unknown tool: {name}")

        handler = getattr(self, handler_method_name)
        norm_args: dict[str, Any] = {n(k): v for k, v in (arguments or {}).items()}

        try:
            with DebugLogger.time_operation(self, resolved_name):
                return await handler(norm_args)
        except Exception as e:
            logger.error(f"Tool {resolved_name} error: {e.__class__.__name__}: {e}")
            return create_error_response(e)

    # ------------------------------------------------------------------
    # Argument extraction helpers (on already-normalized dicts)
    # ------------------------------------------------------------------

    @staticmethod
    def _get_str(args: dict[str, Any], *keys: str, default: str | None = None) -> str | None:
        for k in keys:
            v = args.get(n(k))
            if v is not None and str(v).strip():
                return str(v)
        return default

    @staticmethod
    def _get_list(args: dict[str, Any], *keys: str) -> list | None:
        for k in keys:
            v = args.get(n(k))
            if v is not None:
                return _coerce_list(v)
        return None

    @staticmethod
    def _require_str(args: dict[str, Any], *keys: str, name: str = "") -> str:
        for k in keys:
            v = args.get(n(k))
            if v is not None and str(v).strip():
                return str(v)
        label = name or keys[0]
        raise MissingParameter(f"Missing {label} parameter")

    def cleanup(self) -> None:
        pass


# ---------------------------------------------------------------------------
# ToolProviderManager – routes tool calls to the correct provider
# ---------------------------------------------------------------------------


class ToolProviderManager:
    """Routes MCP tool calls to the correct ToolProvider by normalized name."""

    def __init__(self) -> None:
        self.providers: list[ToolProvider] = []
        self._tool_map: dict[str, ToolProvider] = {}

    def register(self, provider: ToolProvider) -> None:
        self.providers.append(provider)
        for tool in provider.list_tools():
            self._tool_map[n(tool.name)] = provider

    def list_tools(self) -> list[types.Tool]:
        tools: list[types.Tool] = []
        for p in self.providers:
            tools.extend(p.list_tools())
        return tools

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None,
    ) -> list[types.TextContent]:
        resolved_name = resolve_tool_name(name) or name
        provider = self._tool_map.get(n(resolved_name))
        if provider is None:
            return create_error_response(f"Unknown tool: {name}")

        logger.info("Session %s calling %s", get_current_mcp_session_id(), resolved_name)
        return await provider.call_tool(resolved_name, arguments or {})

    def cleanup(self) -> None:
        for p in self.providers:
            try:
                p.cleanup()
            except Exception as e:
                logger.warning(f"Failed to clean up {p.__class__.__name__}: {e}")

"""MCP session identity for log correlation.

The HTTP transport binds the ``mcp-session-id`` header per request.  Nothing
else is kept per session, so requests from different sessions share no state.
"""

from __future__ import annotations

from contextvars import ContextVar

UNBOUND_SESSION = "default"

CURRENT_MCP_SESSION_ID: ContextVar[str] = ContextVar("current_mcp_session_id", default=UNBOUND_SESSION)


def _sdk_session_label() -> str | None:
    """Label for the SDK session handling the current request (stdio has no header)."""
    from mcp.server.lowlevel.server import request_ctx

    try:
        session = request_ctx.get().session
    except LookupError:
        return None
    for attr in ("session_id", "id"):
        value = getattr(session, attr, None)
        if value:
            return str(value)
    return f"sdk-session:{id(session)}"


def get_current_mcp_session_id() -> str:
    bound = CURRENT_MCP_SESSION_ID.get()
    if bound and bound != UNBOUND_SESSION:
        return bound
    return _sdk_session_label() or UNBOUND_SESSION

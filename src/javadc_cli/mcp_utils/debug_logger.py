"""Opt-in diagnostic logging for javadc.

Everything here is silent unless debug mode is on (``--verbose`` or
``JAVADC_DEBUG``).  Lines go through the module logger at INFO so they show up
with the CLI's default stderr configuration.
"""

from __future__ import annotations

import logging
import time

from contextlib import contextmanager
from typing import Any, Iterator

logger = logging.getLogger(__name__)


def _name_of(source: Any) -> str:
    return source if isinstance(source, str) else type(source).__name__


class DebugLogger:
    """Process-wide debug switch plus the helpers that honour it."""

    _debug_enabled: bool = False

    @staticmethod
    def set_debug_enabled(enabled: bool) -> None:
        DebugLogger._debug_enabled = bool(enabled)

    @staticmethod
    def is_debug_enabled() -> bool:
        return DebugLogger._debug_enabled

    @staticmethod
    def debug(source: Any, message: str) -> None:
        """``[DEBUG] <SourceClass>: message``"""
        if DebugLogger._debug_enabled:
            logger.info(f"[DEBUG] {_name_of(source)}: {message}")

    @staticmethod
    def debug_with_exception(source: Any, message: str, exception: BaseException) -> None:
        if DebugLogger._debug_enabled:
            logger.info(f"[DEBUG] {_name_of(source)}: {message}: {exception.__class__.__name__}: {exception}")

    @staticmethod
    def debug_performance(source: Any, operation: str, duration_ms: int) -> None:
        if DebugLogger._debug_enabled:
            logger.info(f"[DEBUG-PERF] {operation} took {duration_ms}ms")

    @staticmethod
    def debug_tool_execution(source: Any, tool_name: str, status: str, details: str | None = None) -> None:
        """``[DEBUG-TOOL] <tool> - <STATUS>[: details]``; status is START, SUCCESS or ERROR."""
        if DebugLogger._debug_enabled:
            suffix = f": {details}" if details else ""
            logger.info(f"[DEBUG-TOOL] {tool_name} - {status}{suffix}")

    @staticmethod
    def debug_class_lookup(source: Any, internal_name: str, data: bytes | None) -> None:
        """Record one engine class request and what it was answered with."""
        if DebugLogger._debug_enabled:
            if data is None:
                answer = "unresolved"
            elif not data:
                answer = "placeholder"
            else:
                answer = f"{len(data)} bytes"
            logger.info(f"[DEBUG-LOOKUP] {_name_of(source)}: {internal_name} -> {answer}")

    @staticmethod
    @contextmanager
    def time_operation(source: Any, operation_name: str) -> Iterator[None]:
        """Bracket a block with START and SUCCESS/ERROR lines plus its duration.

        Example:
            with DebugLogger.time_operation(self, "decompile-from-jar"):
                text = service.decompile_from_jar(jar, name)
        """
        DebugLogger.debug_tool_execution(source, operation_name, "START")
        started = time.perf_counter()
        try:
            yield
        except BaseException as e:
            DebugLogger.debug_performance(source, operation_name, int((time.perf_counter() - started) * 1000))
            DebugLogger.debug_tool_execution(source, operation_name, "ERROR", str(e) or e.__class__.__name__)
            raise
        DebugLogger.debug_performance(source, operation_name, int((time.perf_counter() - started) * 1000))
        DebugLogger.debug_tool_execution(source, operation_name, "SUCCESS")

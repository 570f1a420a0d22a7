"""Drive the decompiler engine over a located class."""

from __future__ import annotations

import logging

from typing import Mapping

from javadc_cli.engine.base import DecompilerEngine, SourceLookup
from javadc_cli.errors import DecompilationFailed
from javadc_cli.mcp_utils.debug_logger import DebugLogger
from javadc_cli.models import ResolutionResult

logger = logging.getLogger(__name__)

CORE_LANGUAGE_PREFIX = "java/lang/"

# Always applied; extra options cannot override them.
FIXED_ENGINE_OPTIONS: dict[str, str] = {
    "hidelangimports": "true",
    "showversion": "false",
}


def build_source_lookup(result: ResolutionResult) -> SourceLookup:
    """Lookup answering the engine's class requests for ``result``.

    Primary class first, then the auxiliary resolver.  Core-language classes
    that are otherwise unknown get an empty placeholder instead of ``None`` so
    the engine does not report them as unresolved.
    """
    primary_name = result.internal_name
    primary_bytes = result.class_bytes
    auxiliary = result.auxiliary_resolver

    def resolve(name: str) -> bytes | None:
        if name == primary_name:
            return primary_bytes
        if auxiliary is not None:
            data = auxiliary(name)
            if data is not None:
                return data
        if name.startswith(CORE_LANGUAGE_PREFIX):
            return b""
        return None

    def lookup(name: str) -> bytes | None:
        if name.endswith(".class"):
            name = name[: -len(".class")]
        data = resolve(name)
        DebugLogger.debug_class_lookup("SourceLookup", name, data)
        return data

    return lookup


class DecompileOrchestrator:
    """Single-shot decompilation of one ``ResolutionResult``."""

    def __init__(self, engine: DecompilerEngine, extra_options: Mapping[str, str] | None = None) -> None:
        self.engine = engine
        self.options: dict[str, str] = {**dict(extra_options or {}), **FIXED_ENGINE_OPTIONS}

    def decompile(self, result: ResolutionResult) -> str:
        """Return the engine's source text for ``result`` verbatim.

        Any engine failure surfaces as ``DecompilationFailed`` with the engine's
        message.  The result's extraction workspace, if any, is removed before
        this returns or raises.
        """
        try:
            with DebugLogger.time_operation(self, f"{self.engine.name}:{result.internal_name}"):
                return self.engine.decompile(result.internal_name, build_source_lookup(result), dict(self.options))
        except DecompilationFailed:
            raise
        except Exception as e:
            logger.debug(f"Engine {self.engine.name} failed on {result.internal_name}: {e.__class__.__name__}: {e}")
            raise DecompilationFailed(str(e) or e.__class__.__name__) from e
        finally:
            if result.workspace is not None:
                result.workspace.cleanup()

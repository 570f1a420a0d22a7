"""Public decompilation operations.

Each operation resolves, decompiles and re-raises any failure as a
``DecompilerServiceError`` whose message starts with a fixed stage prefix.
"""

from __future__ import annotations

import logging

from contextlib import ExitStack
from pathlib import Path
from typing import Sequence

from javadc_cli.config.config_manager import ConfigManager
from javadc_cli.engine.base import DecompilerEngine
from javadc_cli.errors import DecompilerServiceError
from javadc_cli.locator import Locator
from javadc_cli.orchestrator import DecompileOrchestrator

logger = logging.getLogger(__name__)

PATH_ERROR_PREFIX = "Failed to decompile class file"
PACKAGE_ERROR_PREFIX = "Failed to decompile package"
JAR_ERROR_PREFIX = "Failed to decompile JAR file"


class DecompilerService:
    """Locate + decompile, one request at a time, with no state kept between requests."""

    def __init__(self, engine: DecompilerEngine, locator: Locator | None = None, extra_options: dict[str, str] | None = None) -> None:
        self.locator = locator or Locator()
        self.orchestrator = DecompileOrchestrator(engine, extra_options)

    @classmethod
    def from_config(cls, config: ConfigManager, engine: DecompilerEngine | None = None) -> DecompilerService:
        if engine is None:
            from javadc_cli.engine import create_cfr_engine

            engine = create_cfr_engine(config.get_cfr_jar_path(), jvm_path=config.get_jvm_path())
        locator = Locator(classpath_env_var=config.get_classpath_env_var())
        return cls(engine, locator=locator, extra_options=config.get_extra_cfr_options())

    def decompile_from_path(self, class_file_path: str | Path) -> str:
        try:
            result = self.locator.resolve_path(class_file_path)
            return self.orchestrator.decompile(result)
        except Exception as e:
            raise _stage_error(PATH_ERROR_PREFIX, e) from e

    def decompile_from_package(self, package_name: str, classpath: Sequence[str] | None = None) -> str:
        try:
            result = self.locator.resolve_package(package_name, list(classpath or []))
            return self.orchestrator.decompile(result)
        except Exception as e:
            raise _stage_error(PACKAGE_ERROR_PREFIX, e) from e

    def decompile_from_jar(self, jar_file_path: str | Path, class_name: str | None) -> str:
        try:
            with ExitStack() as stack:
                result = self.locator.resolve_jar(jar_file_path, class_name)
                if result.workspace is not None:
                    stack.enter_context(result.workspace)
                return self.orchestrator.decompile(result)
        except Exception as e:
            raise _stage_error(JAR_ERROR_PREFIX, e) from e


def _stage_error(prefix: str, error: Exception) -> DecompilerServiceError:
    message = str(error) or error.__class__.__name__
    logger.debug(f"{prefix}: {error.__class__.__name__}: {message}")
    return DecompilerServiceError(f"{prefix}: {message}")

"""Decompiler Tool Provider - decompile-from-path, decompile-from-package, decompile-from-jar.

Resolution and the engine call block, so each handler runs the service in a
worker thread.
"""

from __future__ import annotations

import asyncio
import logging

from typing import Any

from mcp import types

from javadc_cli.mcp_server.tool_providers import ToolProvider, create_text_response
from javadc_cli.models import DecompileFromJarArgs, DecompileFromPackageArgs, DecompileFromPathArgs
from javadc_cli.registry import TOOL_DECOMPILE_FROM_JAR, TOOL_DECOMPILE_FROM_PACKAGE, TOOL_DECOMPILE_FROM_PATH
from javadc_cli.service import DecompilerService

logger = logging.getLogger(__name__)


class DecompilerToolProvider(ToolProvider):
    HANDLERS = {
        "decompilefrompath": "_handle_path",
        "decompilefrompackage": "_handle_package",
        "decompilefromjar": "_handle_jar",
    }

    def __init__(self, service: DecompilerService) -> None:
        self.service = service

    def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=TOOL_DECOMPILE_FROM_PATH,
                description="Decompiles a Java .class file from a given file path",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "classFilePath": {"type": "string", "description": "The absolute path to the .class file"},
                    },
                    "required": ["classFilePath"],
                },
            ),
            types.Tool(
                name=TOOL_DECOMPILE_FROM_PACKAGE,
                description="Decompiles a Java class from a package name",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "packageName": {"type": "string", "description": "Fully qualified Java package and class name"},
                        "classpath": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Array of classpath directories to search, in order",
                        },
                    },
                    "required": ["packageName"],
                },
            ),
            types.Tool(
                name=TOOL_DECOMPILE_FROM_JAR,
                description="Decompiles a Java class from a JAR file",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "jarFilePath": {"type": "string", "description": "The path to the .jar file"},
                        "className": {"type": "string", "description": "Fully qualified class name inside the JAR (e.g. com.example.Foo)"},
                    },
                    "required": ["jarFilePath", "className"],
                },
            ),
        ]

    async def _handle_path(self, args: dict[str, Any]) -> list[types.TextContent]:
        params = DecompileFromPathArgs(class_file_path=self._require_str(args, "classFilePath", "path", name="classFilePath"))
        source = await asyncio.to_thread(self.service.decompile_from_path, params.class_file_path)
        return create_text_response(source)

    async def _handle_package(self, args: dict[str, Any]) -> list[types.TextContent]:
        params = DecompileFromPackageArgs(
            package_name=self._require_str(args, "packageName", "className", name="packageName"),
            classpath=[str(entry) for entry in (self._get_list(args, "classpath") or [])],
        )
        source = await asyncio.to_thread(self.service.decompile_from_package, params.package_name, params.classpath)
        return create_text_response(source)

    async def _handle_jar(self, args: dict[str, Any]) -> list[types.TextContent]:
        params = DecompileFromJarArgs(
            jar_file_path=self._require_str(args, "jarFilePath", "jarPath", name="jarFilePath"),
            class_name=self._get_str(args, "className"),
        )
        source = await asyncio.to_thread(self.service.decompile_from_jar, params.jar_file_path, params.class_name)
        return create_text_response(source)

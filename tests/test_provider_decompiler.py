"""Unit tests for DecompilerToolProvider.

Covers:
- decompile-from-path / -package / -jar schemas
- HANDLERS keys are normalized
- Argument normalization and aliases
- Failures come back as a single "Error: ..." text block
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from javadc_cli.errors import DecompilerServiceError
from javadc_cli.mcp_server.providers.decompiler import DecompilerToolProvider
from javadc_cli.registry import normalize_identifier as n
from javadc_cli.service import DecompilerService
from tests.helpers import assert_error_text, assert_tool_schema_invariants, make_class_bytes, make_jar, parse_single_text, write_class_file


def _mock_provider() -> tuple[DecompilerToolProvider, MagicMock]:
    service = MagicMock(spec=DecompilerService)
    service.decompile_from_path.return_value = "public class Foo {}"
    service.decompile_from_package.return_value = "public class Foo {}"
    service.decompile_from_jar.return_value = "public class Foo {}"
    return DecompilerToolProvider(service), service


def _tool(provider: DecompilerToolProvider, name: str):
    return next(t for t in provider.list_tools() if t.name == name)


class TestDecompilerProviderSchema:
    def test_lists_three_tools(self):
        p, _ = _mock_provider()
        names = [t.name for t in p.list_tools()]
        for tool in p.list_tools():
            assert_tool_schema_invariants(tool)
        assert names == ["decompile-from-path", "decompile-from-package", "decompile-from-jar"]

    def test_path_schema(self):
        p, _ = _mock_provider()
        tool = _tool(p, "decompile-from-path")
        assert_tool_schema_invariants(tool, expected_name="decompile-from-path")
        assert list(tool.inputSchema["properties"]) == ["classFilePath"]
        assert tool.inputSchema["required"] == ["classFilePath"]

    def test_package_schema(self):
        p, _ = _mock_provider()
        tool = _tool(p, "decompile-from-package")
        props = tool.inputSchema["properties"]
        assert props["classpath"]["type"] == "array"
        assert props["classpath"]["items"] == {"type": "string"}
        assert tool.inputSchema["required"] == ["packageName"]

    def test_jar_schema_requires_class_name(self):
        p, _ = _mock_provider()
        tool = _tool(p, "decompile-from-jar")
        assert tool.inputSchema["required"] == ["jarFilePath", "className"]


class TestDecompilerProviderHandlers:
    def test_handler_keys_normalized(self):
        for key in DecompilerToolProvider.HANDLERS:
            assert key == n(key)

    def test_every_tool_has_a_handler(self):
        p, _ = _mock_provider()
        for tool in p.list_tools():
            assert n(tool.name) in DecompilerToolProvider.HANDLERS

    @pytest.mark.asyncio
    async def test_path_handler(self):
        p, service = _mock_provider()
        resp = await p.call_tool("decompile-from-path", {"classFilePath": "/tmp/Foo.class"})
        assert parse_single_text(resp) == "public class Foo {}"
        service.decompile_from_path.assert_called_once_with("/tmp/Foo.class")

    @pytest.mark.asyncio
    async def test_package_handler_with_classpath(self):
        p, service = _mock_provider()
        await p.call_tool("decompile-from-package", {"packageName": "com.example.Foo", "classpath": ["/a", "/b"]})
        service.decompile_from_package.assert_called_once_with("com.example.Foo", ["/a", "/b"])

    @pytest.mark.asyncio
    async def test_package_handler_without_classpath(self):
        p, service = _mock_provider()
        await p.call_tool("decompile-from-package", {"packageName": "com.example.Foo"})
        service.decompile_from_package.assert_called_once_with("com.example.Foo", [])

    @pytest.mark.asyncio
    async def test_jar_handler(self):
        p, service = _mock_provider()
        await p.call_tool("decompile-from-jar", {"jarFilePath": "/tmp/lib.jar", "className": "com.example.Foo"})
        service.decompile_from_jar.assert_called_once_with("/tmp/lib.jar", "com.example.Foo")

    @pytest.mark.asyncio
    async def test_argument_keys_normalized(self):
        p, service = _mock_provider()
        await p.call_tool("decompile_from_jar", {"jar_file_path": "/tmp/lib.jar", "CLASS-NAME": "com.example.Foo"})
        service.decompile_from_jar.assert_called_once_with("/tmp/lib.jar", "com.example.Foo")

    @pytest.mark.asyncio
    async def test_argument_aliases(self):
        p, service = _mock_provider()
        await p.call_tool("decompile-from-path", {"path": "/tmp/Foo.class"})
        await p.call_tool("decompile-from-jar", {"jarPath": "/tmp/lib.jar", "className": "Foo"})
        service.decompile_from_path.assert_called_once_with("/tmp/Foo.class")
        service.decompile_from_jar.assert_called_once_with("/tmp/lib.jar", "Foo")


class TestDecompilerProviderErrors:
    @pytest.mark.asyncio
    async def test_missing_required_argument(self):
        p, service = _mock_provider()
        resp = await p.call_tool("decompile-from-path", {})
        assert_error_text(resp, must_contain=["classFilePath"])
        service.decompile_from_path.assert_not_called()

    @pytest.mark.asyncio
    async def test_service_error_text_is_passed_through(self):
        p, service = _mock_provider()
        service.decompile_from_package.side_effect = DecompilerServiceError("Failed to decompile package: Could not find class file for package: a.B")
        resp = await p.call_tool("decompile-from-package", {"packageName": "a.B"})
        assert parse_single_text(resp) == "Error: Failed to decompile package: Could not find class file for package: a.B"

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        p, _ = _mock_provider()
        resp = await p.call_tool("list-functions", {})
        assert_error_text(resp, must_contain=["Unknown tool"])


class TestDecompilerProviderWithService:
    @pytest.mark.asyncio
    async def test_jar_without_class_name(self, tmp_path: Path, service: DecompilerService):
        jar = make_jar(tmp_path / "lib.jar", {"com/example/Foo.class": make_class_bytes()})
        resp = await DecompilerToolProvider(service).call_tool("decompile-from-jar", {"jarFilePath": str(jar)})
        assert parse_single_text(resp) == "Error: Failed to decompile JAR file: className is required when decompiling from a JAR file"

    @pytest.mark.asyncio
    async def test_path_round_trip(self, tmp_path: Path, service: DecompilerService):
        class_file = write_class_file(tmp_path / "Build", "com/example/Foo")
        resp = await DecompilerToolProvider(service).call_tool("decompile-from-path", {"classFilePath": str(class_file)})
        text = parse_single_text(resp)
        assert not text.startswith("Error:")
        assert "public class Foo" in text


def test_schema_properties_match_registry():
    from javadc_cli.registry import get_tool_params

    p, _ = _mock_provider()
    for tool in p.list_tools():
        assert list(tool.inputSchema["properties"]) == get_tool_params(tool.name)

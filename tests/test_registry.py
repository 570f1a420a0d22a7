from __future__ import annotations

import pytest

from javadc_cli.registry import (
    TOOL_DECOMPILE_FROM_JAR,
    TOOL_DECOMPILE_FROM_PACKAGE,
    TOOL_DECOMPILE_FROM_PATH,
    TOOLS,
    get_tool_params,
    normalize_identifier,
    resolve_tool_name,
)


def test_tools_are_kebab_case() -> None:
    assert TOOLS == ["decompile-from-path", "decompile-from-package", "decompile-from-jar"]


def test_tool_params() -> None:
    assert get_tool_params(TOOL_DECOMPILE_FROM_PATH) == ["classFilePath"]
    assert get_tool_params(TOOL_DECOMPILE_FROM_PACKAGE) == ["packageName", "classpath"]
    assert get_tool_params(TOOL_DECOMPILE_FROM_JAR) == ["jarFilePath", "className"]
    assert get_tool_params("unknown-tool") == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("decompile-from-jar", "decompilefromjar"),
        ("class_file_path", "classfilepath"),
        ("jarFilePath", "jarfilepath"),
        ("  Package Name ", "packagename"),
    ],
)
def test_normalize_identifier(raw: str, expected: str) -> None:
    assert normalize_identifier(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("decompile-from-path", TOOL_DECOMPILE_FROM_PATH),
        ("decompile_from_package", TOOL_DECOMPILE_FROM_PACKAGE),
        ("DecompileFromJar", TOOL_DECOMPILE_FROM_JAR),
        ("decompile-class", TOOL_DECOMPILE_FROM_PATH),
        ("decompile_jar", TOOL_DECOMPILE_FROM_JAR),
        ("javadc_decompile_from_jar", TOOL_DECOMPILE_FROM_JAR),
        ("mcp.decompile-package", TOOL_DECOMPILE_FROM_PACKAGE),
    ],
)
def test_resolve_tool_name(raw: str, expected: str) -> None:
    assert resolve_tool_name(raw) == expected


@pytest.mark.parametrize("raw", ["", "---", "list-functions", "javadc"])
def test_resolve_tool_name_unknown(raw: str) -> None:
    assert resolve_tool_name(raw) is None


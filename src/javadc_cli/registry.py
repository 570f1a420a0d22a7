"""Tool registry - tool names, parameter names and normalization helpers.

Single source of truth for the names the MCP server advertises and the
lenient matching used when a client sends a variant of them.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# MCP tool names
# ---------------------------------------------------------------------------
TOOL_DECOMPILE_FROM_PATH = "decompile-from-path"
TOOL_DECOMPILE_FROM_PACKAGE = "decompile-from-package"
TOOL_DECOMPILE_FROM_JAR = "decompile-from-jar"

TOOLS = [
    TOOL_DECOMPILE_FROM_PATH,
    TOOL_DECOMPILE_FROM_PACKAGE,
    TOOL_DECOMPILE_FROM_JAR,
]

# Parameter names (camelCase) per tool
TOOL_PARAMS: dict[str, list[str]] = {
    TOOL_DECOMPILE_FROM_PATH: ["classFilePath"],
    TOOL_DECOMPILE_FROM_PACKAGE: ["packageName", "classpath"],
    TOOL_DECOMPILE_FROM_JAR: ["jarFilePath", "className"],
}

# normalized alias -> canonical tool name
TOOL_ALIASES: dict[str, str] = {
    "decompileclass": TOOL_DECOMPILE_FROM_PATH,
    "decompilefile": TOOL_DECOMPILE_FROM_PATH,
    "decompileclassfile": TOOL_DECOMPILE_FROM_PATH,
    "decompilepackage": TOOL_DECOMPILE_FROM_PACKAGE,
    "decompilefromclasspath": TOOL_DECOMPILE_FROM_PACKAGE,
    "decompilejar": TOOL_DECOMPILE_FROM_JAR,
}

_TOOL_PREFIXES = (
    "javadc",
    "java",
    "mcp",
    "tool",
)


def get_tool_params(tool_name: str) -> list[str]:
    """Return the parameter names (camelCase) for a tool, or empty if unknown."""
    return list(TOOL_PARAMS.get(tool_name, []))


def normalize_identifier(s: str) -> str:
    """Normalize an identifier for case-insensitive, separator-insensitive matching.

    Examples::

        normalize_identifier("decompile-from-jar")  # -> "decompilefromjar"
        normalize_identifier("class_file_path")     # -> "classfilepath"
        normalize_identifier("jarFilePath")         # -> "jarfilepath"
    """
    return re.sub(r"[^a-z]", "", s.lower().strip())


def resolve_tool_name(tool_name: str) -> str | None:
    """Resolve tool aliases and noisy variants to canonical kebab-case tool names."""
    norm = normalize_identifier(tool_name)
    if not norm:
        return None

    by_norm: dict[str, str] = {normalize_identifier(tool): tool for tool in TOOLS}
    candidates = [norm]
    stripped = norm
    for prefix in _TOOL_PREFIXES:
        if stripped.startswith(prefix) and len(stripped) > len(prefix):
            stripped = stripped[len(prefix) :]
            candidates.append(stripped)

    for candidate in candidates:
        resolved = by_norm.get(candidate) or TOOL_ALIASES.get(candidate)
        if resolved is not None:
            return resolved
    return None


"""Test helper utilities for javadc tests.

Provides common functionality used across multiple test modules:
- A fake decompiler engine
- Class file and JAR fixture builders
- Response validation
"""

from __future__ import annotations

import threading
import zipfile

from pathlib import Path
from typing import Any, Mapping

CLASS_MAGIC = b"\xca\xfe\xba\xbe"


def make_class_bytes(tag: str = "") -> bytes:
    """Bytes that start like a class file (magic + version 52), followed by ``tag``.

    ``FakeEngine`` echoes the tag into its output, which lets tests tell which
    bytes were decompiled.
    """
    return CLASS_MAGIC + b"\x00\x00\x00\x34" + tag.encode("ascii")


def write_class_file(root: Path, internal_name: str, data: bytes | None = None) -> Path:
    """Write ``<root>/<internal_name>.class`` and return its path."""
    path = Path(root, *internal_name.split("/")).with_suffix(".class")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(make_class_bytes(internal_name) if data is None else data)
    return path


def make_jar(path: Path, entries: Mapping[str, bytes | str]) -> Path:
    """Create a JAR at ``path`` holding ``entries`` (entry name -> content)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as jar:
        for name, content in entries.items():
            jar.writestr(name, content)
    return path


class FakeEngine:
    """DecompilerEngine stand-in.

    Loads the requested class through the lookup, refuses bytes without the
    class-file magic, optionally asks for extra classes (``also_request``) and
    renders a tiny Java source naming the class.
    """

    name = "fake"

    def __init__(self, also_request: tuple[str, ...] = (), barrier: threading.Barrier | None = None) -> None:
        self.also_request = also_request
        self.barrier = barrier
        self.calls: list[tuple[str, dict[str, str]]] = []
        self.lookups: dict[str, bytes | None] = {}
        self._lock = threading.Lock()

    def decompile(self, internal_name: str, source_lookup, options: Mapping[str, str]) -> str:
        with self._lock:
            self.calls.append((internal_name, dict(options)))

        data = source_lookup(internal_name + ".class")
        if data is None:
            raise RuntimeError(f"Could not load {internal_name}")
        if not data.startswith(CLASS_MAGIC):
            raise RuntimeError(f"{internal_name} is not a valid class file")

        for name in self.also_request:
            found = source_lookup(name)
            with self._lock:
                self.lookups[name] = found

        if self.barrier is not None:
            self.barrier.wait(timeout=10)

        package, _, simple = internal_name.rpartition("/")
        header = f"package {package.replace('/', '.')};\n\n" if package else ""
        tag = data[len(make_class_bytes()) :].decode("ascii", "replace")
        return f"{header}public class {simple} {{\n    // {tag}\n}}\n"


def parse_single_text(response: list[Any]) -> str:
    """Return the text of a single-block MCP text response."""
    assert isinstance(response, list)
    assert len(response) == 1
    first = response[0]
    assert first.type == "text"
    assert isinstance(first.text, str)
    return first.text


def assert_error_text(response: list[Any], *, must_contain: list[str] | None = None) -> str:
    text = parse_single_text(response)
    assert text.startswith("Error: ")
    assert text.strip() != "Error:"
    for token in must_contain or []:
        assert token in text
    return text


def assert_tool_schema_invariants(tool: Any, *, expected_name: str | None = None) -> None:
    assert tool is not None
    assert isinstance(tool.name, str)
    assert tool.name.strip() == tool.name
    assert tool.name != ""
    assert tool.name.lower() == tool.name
    if expected_name is not None:
        assert tool.name == expected_name
    assert isinstance(tool.inputSchema, dict)
    assert tool.inputSchema.get("type") == "object"
    props = tool.inputSchema.get("properties")
    assert isinstance(props, dict)
    assert all(isinstance(k, str) and k and " " not in k and "_" not in k for k in props)
    assert all(isinstance(v, dict) and "type" in v and "description" in v for v in props.values())
    required = tool.inputSchema.get("required", [])
    assert isinstance(required, list)
    assert all(k in props for k in required)
    assert isinstance(tool.description, str)
    assert tool.description.strip() == tool.description
    assert len(tool.description) > 0

from __future__ import annotations

import re

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Union

from pydantic import BaseModel, Field

from javadc_cli.errors import InvalidClassName, MissingParameter

if TYPE_CHECKING:
    from javadc_cli.archive import ExtractionWorkspace

INTERNAL_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_/$]+$")

# internal name -> class bytes, or None when the class is unknown
AuxiliaryResolver = Callable[[str], Union[bytes, None]]


def to_internal_name(class_name: str) -> str:
    """Convert a dotted (or already slash-separated) class name to an internal name.

    ``com.example.Foo`` -> ``com/example/Foo``.  A trailing ``.class`` suffix is
    dropped.  Raises ``InvalidClassName`` if the result is not a legal binary name.
    """
    if class_name is None or not str(class_name).strip():
        raise MissingParameter("Class name is required")

    name = str(class_name).strip()
    if name.endswith(".class"):
        name = name[: -len(".class")]
    internal = name.replace(".", "/")
    if not INTERNAL_NAME_PATTERN.match(internal) or "//" in internal or internal.startswith("/") or internal.endswith("/"):
        raise InvalidClassName(f"Invalid class name: {class_name}")
    return internal


# ---------------------------------------------------------------------------
# Class identifiers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PathIdentifier:
    """A compiled class addressed by its absolute file path."""

    path: Path


@dataclass(frozen=True)
class PackageIdentifier:
    """A compiled class addressed by dotted name, searched on a classpath."""

    name: str
    classpath: tuple[str, ...] = ()


@dataclass(frozen=True)
class JarIdentifier:
    """A class inside a JAR archive."""

    jar_path: Path
    class_name: str | None


ClassIdentifier = Union[PathIdentifier, PackageIdentifier, JarIdentifier]


@dataclass(frozen=True)
class ResolutionResult:
    """Bytes of one located class plus everything the decompiler may need around it."""

    internal_name: str
    class_bytes: bytes
    auxiliary_resolver: AuxiliaryResolver | None = None
    workspace: ExtractionWorkspace | None = field(default=None, compare=False)
    source_path: Path | None = None


# ---------------------------------------------------------------------------
# Tool arguments
# ---------------------------------------------------------------------------


class DecompileFromPathArgs(BaseModel):
    """Arguments of the ``decompile-from-path`` tool."""

    class_file_path: str = Field(..., description="The absolute path to the .class file")


class DecompileFromPackageArgs(BaseModel):
    """Arguments of the ``decompile-from-package`` tool."""

    package_name: str = Field(..., description="Fully qualified Java package and class name")
    classpath: list[str] = Field(default_factory=list, description="Classpath directories to search, in order")


class DecompileFromJarArgs(BaseModel):
    """Arguments of the ``decompile-from-jar`` tool."""

    jar_file_path: str = Field(..., description="The path to the .jar file")
    class_name: str | None = Field(None, description="Fully qualified class name inside the JAR (required)")

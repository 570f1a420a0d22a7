"""Locate compiled class bytes from a path, a dotted name, or a JAR entry.

The locator produces a ``ResolutionResult`` (internal name + bytes, and for JARs
an extraction workspace with a resolver for sibling classes).  It never talks
to the decompiler.
"""

from __future__ import annotations

import logging
import os
import re

from pathlib import Path
from typing import Callable, Mapping, Protocol, Sequence

from javadc_cli import archive
from javadc_cli.archive import ExtractionWorkspace
from javadc_cli.errors import (
    ClassNotFoundInArchive,
    EmptyArchive,
    FileNotFound,
    InvalidClassName,
    MissingParameter,
    NotAClassFile,
    PackageNotFoundOnClasspath,
)
from javadc_cli.models import (
    INTERNAL_NAME_PATTERN,
    ClassIdentifier,
    JarIdentifier,
    PackageIdentifier,
    PathIdentifier,
    ResolutionResult,
    to_internal_name,
)

logger = logging.getLogger(__name__)

CLASS_SUFFIX = ".class"
JAR_SUFFIX = ".jar"
PACKAGE_SEGMENT_PATTERN = re.compile(r"^[a-z][a-z0-9_.]*$")


class PackageInferenceStrategy(Protocol):
    """Derives an internal name for a class file found outside any known classpath root."""

    def infer_internal_name(self, class_file: Path) -> str: ...


class LowercaseDirectoryInference:
    """Treat the run of lowercase directories right above the file as its package.

    ``/work/Build/com/example/Foo.class`` -> ``com/example/Foo``.  This is a
    guess: a lowercase directory that is not part of the package (``/tmp``,
    ``out``) is taken as one.
    """

    def infer_internal_name(self, class_file: Path) -> str:
        name = class_file.name
        class_name = name[: -len(CLASS_SUFFIX)] if name.endswith(CLASS_SUFFIX) else class_file.stem

        package_parts: list[str] = []
        for part in reversed(class_file.parent.parts):
            if not PACKAGE_SEGMENT_PATTERN.match(part):
                break
            package_parts.insert(0, part)

        internal = "/".join([*package_parts, class_name]).replace(".", "/")
        if not INTERNAL_NAME_PATTERN.match(internal):
            raise InvalidClassName(f"Cannot derive a class name from {class_file}")
        return internal


class Locator:
    """Turns a ``ClassIdentifier`` into a ``ResolutionResult``."""

    def __init__(
        self,
        inference: PackageInferenceStrategy | None = None,
        classpath_env_var: str = "CLASSPATH",
        environ: Mapping[str, str] | None = None,
        cwd: Callable[[], str] = os.getcwd,
        workspace_root: Path | None = None,
    ) -> None:
        self.inference: PackageInferenceStrategy = inference or LowercaseDirectoryInference()
        self.classpath_env_var = classpath_env_var
        self._environ = environ
        self._cwd = cwd
        self.workspace_root = workspace_root

    def resolve(self, identifier: ClassIdentifier) -> ResolutionResult:
        if isinstance(identifier, PathIdentifier):
            return self.resolve_path(identifier.path)
        if isinstance(identifier, PackageIdentifier):
            return self.resolve_package(identifier.name, identifier.classpath)
        if isinstance(identifier, JarIdentifier):
            return self.resolve_jar(identifier.jar_path, identifier.class_name)
        raise TypeError(f"Unsupported class identifier: {identifier!r}")

    # ------------------------------------------------------------------
    # Path mode
    # ------------------------------------------------------------------

    def resolve_path(self, class_file_path: str | os.PathLike[str]) -> ResolutionResult:
        if class_file_path is None or not str(class_file_path).strip():
            raise MissingParameter("Missing classFilePath parameter")

        path = Path(class_file_path)
        if path.name.lower().endswith(JAR_SUFFIX):
            raise NotAClassFile(f"{path} is a JAR archive; use decompile-from-jar with a className instead")

        data = _read_bytes(path)
        internal_name = self.inference.infer_internal_name(path)
        logger.debug("Resolved %s as %s", path, internal_name)
        return ResolutionResult(internal_name=internal_name, class_bytes=data, source_path=path)

    # ------------------------------------------------------------------
    # Package mode
    # ------------------------------------------------------------------

    def effective_classpath(self, classpath: Sequence[str] | None) -> list[str]:
        """The directories searched for a package lookup, in order."""
        entries = [str(cp) for cp in (classpath or []) if str(cp)]
        if entries:
            return entries

        environ = os.environ if self._environ is None else self._environ
        env_classpath = environ.get(self.classpath_env_var)
        if env_classpath:
            entries = [cp for cp in env_classpath.split(os.pathsep) if cp]
            if entries:
                return entries

        return [self._cwd()]

    def find_class_file(self, package_name: str, classpath: Sequence[str] | None = None) -> Path | None:
        relative = Path(*to_internal_name(package_name).split("/")).with_suffix(CLASS_SUFFIX)
        for directory in self.effective_classpath(classpath):
            candidate = Path(directory) / relative
            if candidate.is_file():
                return candidate
        return None

    def resolve_package(self, package_name: str, classpath: Sequence[str] | None = None) -> ResolutionResult:
        if package_name is None or not str(package_name).strip():
            raise MissingParameter("Missing packageName parameter")

        internal_name = to_internal_name(package_name)
        class_file = self.find_class_file(package_name, classpath)
        if class_file is None:
            raise PackageNotFoundOnClasspath(f"Could not find class file for package: {package_name}")

        logger.debug("Found %s at %s", package_name, class_file)
        return ResolutionResult(internal_name=internal_name, class_bytes=_read_bytes(class_file), source_path=class_file)

    # ------------------------------------------------------------------
    # JAR mode
    # ------------------------------------------------------------------

    def resolve_jar(self, jar_file_path: str | os.PathLike[str], class_name: str | None) -> ResolutionResult:
        """Locate ``class_name`` inside a JAR.

        The whole archive is extracted into a fresh ``ExtractionWorkspace`` so the
        decompiler can pull sibling classes through the result's auxiliary
        resolver.  The caller owns the returned workspace; on failure it is
        removed here before the error propagates.
        """
        if class_name is None or not str(class_name).strip():
            raise MissingParameter("className is required when decompiling from a JAR file")
        if jar_file_path is None or not str(jar_file_path).strip():
            raise MissingParameter("Missing jarFilePath parameter")

        jar_path = Path(jar_file_path)
        internal_name = to_internal_name(class_name)

        class_entries = archive.list_class_entries(jar_path)
        if not class_entries:
            raise EmptyArchive(f"No class files found in JAR: {jar_path}")

        workspace = ExtractionWorkspace(self.workspace_root)
        try:
            archive.extract_all(jar_path, workspace.path)

            entry_name = internal_name + CLASS_SUFFIX
            if entry_name not in class_entries:
                raise ClassNotFoundInArchive(f"Class {class_name} not found in JAR {jar_path.name}")

            data = workspace.read_class(internal_name)
            if data is None:
                raise FileNotFound(f"Extracted class file missing: {workspace.class_file(internal_name)}")
        except BaseException:
            workspace.cleanup()
            raise

        logger.debug("Extracted %d classes from %s into %s", len(class_entries), jar_path, workspace.path)
        return ResolutionResult(
            internal_name=internal_name,
            class_bytes=data,
            auxiliary_resolver=workspace.read_class,
            workspace=workspace,
            source_path=jar_path,
        )


def _read_bytes(path: Path) -> bytes:
    if not path.is_file():
        raise FileNotFound(f"File not found: {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileNotFound(f"Cannot read {path}: {e}") from e

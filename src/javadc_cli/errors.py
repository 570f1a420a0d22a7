"""Exception taxonomy for class resolution and decompilation.

Every failure raised by the locator, the archive helpers, the orchestrator and
the engine derives from ``JavaDecompilerError``.  All of them are terminal for
the request: nothing in this package retries.
"""

from __future__ import annotations


class JavaDecompilerError(Exception):
    """Base class for every resolution/decompilation failure."""


# ---------------------------------------------------------------------------
# Resolution failures
# ---------------------------------------------------------------------------


class FileNotFound(JavaDecompilerError):
    """Raised when a class file or JAR does not exist or cannot be read."""


class NotAClassFile(JavaDecompilerError):
    """Raised when a JAR is handed to the single-class path resolver."""


class MissingParameter(JavaDecompilerError):
    """Raised when a mandatory request parameter is absent or blank."""


class InvalidClassName(MissingParameter):
    """Raised when a class name cannot be turned into a valid internal name."""


class PackageNotFoundOnClasspath(JavaDecompilerError):
    """Raised when no classpath directory holds the requested class."""


class EmptyArchive(JavaDecompilerError):
    """Raised when a JAR contains no ``.class`` entries."""


class ClassNotFoundInArchive(JavaDecompilerError):
    """Raised when the requested class is not an entry of the JAR."""


class ExtractionFailed(JavaDecompilerError):
    """Raised when a JAR cannot be read or extracted."""


# ---------------------------------------------------------------------------
# Decompilation failures
# ---------------------------------------------------------------------------


class DecompilationFailed(JavaDecompilerError):
    """Raised when the decompiler engine reports an error."""


class EngineUnavailable(DecompilationFailed):
    """Raised when the decompiler engine cannot be started (no JVM, no CFR jar)."""


class DecompilerServiceError(JavaDecompilerError):
    """Stage-prefixed error raised by the public service operations."""

"""javadc - MCP server that decompiles Java bytecode.

Exposes decompile-from-path, decompile-from-package and decompile-from-jar
as MCP tools over stdio or streamable HTTP, delegating to CFR through JPype.
Programmatic use: ``DecompilerService`` with any ``DecompilerEngine``.
"""

try:
    from ._version import version as __version__
except ImportError:
    # Fallback version if not installed or in development without git tags
    __version__ = "0.0.0.dev0"

from javadc_cli.errors import (
    ClassNotFoundInArchive,
    DecompilationFailed,
    DecompilerServiceError,
    EmptyArchive,
    EngineUnavailable,
    ExtractionFailed,
    FileNotFound,
    InvalidClassName,
    JavaDecompilerError,
    MissingParameter,
    NotAClassFile,
    PackageNotFoundOnClasspath,
)
from javadc_cli.locator import LowercaseDirectoryInference, Locator, PackageInferenceStrategy
from javadc_cli.models import (
    JarIdentifier,
    PackageIdentifier,
    PathIdentifier,
    ResolutionResult,
    to_internal_name,
)
from javadc_cli.orchestrator import DecompileOrchestrator
from javadc_cli.service import DecompilerService

__all__ = [
    "ClassNotFoundInArchive",
    "DecompilationFailed",
    "DecompileOrchestrator",
    "DecompilerService",
    "DecompilerServiceError",
    "EmptyArchive",
    "EngineUnavailable",
    "ExtractionFailed",
    "FileNotFound",
    "InvalidClassName",
    "JarIdentifier",
    "JavaDecompilerError",
    "Locator",
    "LowercaseDirectoryInference",
    "MissingParameter",
    "NotAClassFile",
    "PackageIdentifier",
    "PackageInferenceStrategy",
    "PathIdentifier",
    "ResolutionResult",
    "__version__",
    "to_internal_name",
]

"""JAR reading/extraction and the per-request extraction workspace."""

from __future__ import annotations

import logging
import shutil
import tempfile
import zipfile

from pathlib import Path
from types import TracebackType

from javadc_cli.errors import ExtractionFailed, FileNotFound
from javadc_cli.mcp_utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "javadc-"


def list_entries(jar_path: Path) -> list[str]:
    """Return every entry name of ``jar_path`` in archive order."""
    jar_path = Path(jar_path)
    if not jar_path.is_file():
        raise FileNotFound(f"JAR file not found: {jar_path}")
    try:
        with zipfile.ZipFile(jar_path, "r") as jar:
            return jar.namelist()
    except (zipfile.BadZipFile, OSError) as e:
        raise ExtractionFailed(f"Cannot read JAR {jar_path}: {e}") from e


def list_class_entries(jar_path: Path) -> list[str]:
    """Return the ``.class`` entry names of ``jar_path``."""
    return [name for name in list_entries(jar_path) if name.endswith(".class")]


def extract_all(jar_path: Path, destination: Path) -> None:
    """Extract the whole archive into ``destination``.

    Members whose resolved path would land outside ``destination`` are refused.
    """
    destination = Path(destination).resolve()
    try:
        with zipfile.ZipFile(jar_path, "r") as jar:
            for member in jar.namelist():
                target = (destination / member).resolve()
                if target != destination and destination not in target.parents:
                    raise ExtractionFailed(f"Unsafe archive member path: {member}")
            jar.extractall(destination)
    except ExtractionFailed:
        raise
    except (zipfile.BadZipFile, OSError, RuntimeError) as e:
        raise ExtractionFailed(f"Cannot extract JAR {jar_path}: {e}") from e


class ExtractionWorkspace:
    """Temporary directory holding one request's extracted JAR contents.

    Usable as a context manager; the directory is removed on exit whatever the
    outcome.  ``cleanup()`` is idempotent and never raises.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.path: Path = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=root))
        self._closed: bool = False
        DebugLogger.debug(self, f"Created workspace {self.path}")

    @property
    def closed(self) -> bool:
        return self._closed

    def class_file(self, internal_name: str) -> Path:
        return self.path / f"{internal_name}.class"

    def read_class(self, internal_name: str) -> bytes | None:
        """Bytes of ``internal_name`` from the workspace, or None if it is not there."""
        if self._closed:
            return None
        candidate = self.class_file(internal_name)
        try:
            candidate.resolve().relative_to(self.path.resolve())
        except ValueError:
            return None
        try:
            return candidate.read_bytes()
        except OSError:
            return None

    def cleanup(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            shutil.rmtree(self.path)
            DebugLogger.debug(self, f"Removed workspace {self.path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove workspace {self.path}: {e}")

    def __enter__(self) -> ExtractionWorkspace:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"ExtractionWorkspace(path={self.path}, closed={self._closed})"

"""CFR decompiler driven in-process through JPype.

CFR pulls class bytes through a ``ClassFileSource`` proxy backed by the
caller's lookup function, and pushes its output into an ``OutputSinkFactory``
proxy that collects the Java text and any exception messages.
"""

from __future__ import annotations

import logging
import threading

from pathlib import Path
from typing import Any, Mapping, Sequence

import jpype

from jpype import JImplements, JOverride

from javadc_cli.engine.base import SourceLookup
from javadc_cli.errors import DecompilationFailed, EngineUnavailable
from javadc_cli.mcp_utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)

CFR_DRIVER_BUILDER = "org.benf.cfr.reader.api.CfrDriver$Builder"
CLASS_SUFFIX = ".class"

_JVM_LOCK = threading.Lock()


def start_jvm(cfr_jar: Path, jvm_path: str | None = None, jvm_args: Sequence[str] = ()) -> None:
    """Start the JVM with ``cfr_jar`` on its classpath (once per process)."""
    with _JVM_LOCK:
        if jpype.isJVMStarted():
            return

        cfr_jar = Path(cfr_jar).expanduser()
        if not cfr_jar.is_file():
            raise EngineUnavailable(f"CFR jar not found: {cfr_jar} (set JAVADC_CFR_JAR or --cfr-jar)")

        try:
            jvm = jvm_path or jpype.getDefaultJVMPath()
            jpype.startJVM(jvm, "-Djava.awt.headless=true", *jvm_args, classpath=[str(cfr_jar.resolve())])
        except (jpype.JVMNotFoundException, jpype.JVMNotSupportedException, OSError, RuntimeError) as e:
            raise EngineUnavailable(f"Unable to start the JVM: {e}") from e

        logger.info(f"JVM started with CFR from {cfr_jar}")


@JImplements("org.benf.cfr.reader.api.ClassFileSource", deferred=True)
class LookupClassFileSource:
    """Serves CFR's class requests from a Python lookup function."""

    def __init__(self, lookup: SourceLookup) -> None:
        self._lookup = lookup

    @JOverride
    def informAnalysisRelativePathDetail(self, usePath, classFilePath):
        pass

    @JOverride
    def addJar(self, jarPath):
        return jpype.JClass("java.util.Collections").emptyList()

    @JOverride
    def getPossiblyRenamedPath(self, path):
        return path

    @JOverride
    def getClassFileContent(self, path):
        name = str(path)
        data = self._lookup(name)
        if data is None:
            raise jpype.JClass("java.io.IOException")(f"No class data for {name}")
        pair = jpype.JClass("org.benf.cfr.reader.bytecode.analysis.parse.utils.Pair")
        return pair.make(jpype.JArray(jpype.JByte)(data), path)


@JImplements("org.benf.cfr.reader.api.OutputSinkFactory$Sink", deferred=True)
class _CallbackSink:
    def __init__(self, callback) -> None:
        self._callback = callback

    @JOverride
    def write(self, sinkable):
        self._callback(str(sinkable))


@JImplements("org.benf.cfr.reader.api.OutputSinkFactory", deferred=True)
class CollectingSinkFactory:
    """Collects CFR's Java output and exception messages as strings."""

    def __init__(self) -> None:
        self.java: list[str] = []
        self.exceptions: list[str] = []
        self.summary: list[str] = []

    @JOverride
    def getSupportedSinks(self, sinkType, available):
        sink_class = jpype.JClass("org.benf.cfr.reader.api.OutputSinkFactory$SinkClass")
        return jpype.JClass("java.util.Collections").singletonList(sink_class.STRING)

    @JOverride
    def getSink(self, sinkType, sinkClass):
        kind = str(sinkType.name())
        if kind == "JAVA":
            return _CallbackSink(self.java.append)
        if kind == "EXCEPTION":
            return _CallbackSink(self.exceptions.append)
        if kind == "SUMMARY":
            return _CallbackSink(self.summary.append)
        return _CallbackSink(lambda _text: None)


class CfrEngine:
    """``DecompilerEngine`` backed by CFR's ``CfrDriver`` API."""

    name = "cfr"

    def __init__(self, cfr_jar: Path, jvm_path: str | None = None, jvm_args: Sequence[str] = ()) -> None:
        self.cfr_jar = Path(cfr_jar)
        self.jvm_path = jvm_path
        self.jvm_args = tuple(jvm_args)

    def ensure_started(self) -> None:
        start_jvm(self.cfr_jar, self.jvm_path, self.jvm_args)
        try:
            jpype.JClass(CFR_DRIVER_BUILDER)
        except Exception as e:
            raise EngineUnavailable(f"CFR classes are not on the JVM classpath: {e}") from e

    def decompile(self, internal_name: str, source_lookup: SourceLookup, options: Mapping[str, str]) -> str:
        self.ensure_started()

        sink = CollectingSinkFactory()
        try:
            driver = (
                jpype.JClass(CFR_DRIVER_BUILDER)()
                .withOptions(_to_java_map(options))
                .withClassFileSource(LookupClassFileSource(source_lookup))
                .withOutputSink(sink)
                .build()
            )
            driver.analyse(jpype.JClass("java.util.Collections").singletonList(internal_name + CLASS_SUFFIX))
        except jpype.JException as e:
            raise DecompilationFailed(f"CFR failed on {internal_name}: {e}") from e

        for line in sink.summary:
            DebugLogger.debug(self, f"CFR summary for {internal_name}: {line.strip()}")

        source = "".join(sink.java)
        if not source.strip():
            detail = "; ".join(message.strip() for message in sink.exceptions if message.strip())
            raise DecompilationFailed(detail or f"CFR produced no output for {internal_name}")
        return source


def _to_java_map(options: Mapping[str, Any]):
    java_map = jpype.JClass("java.util.HashMap")()
    for key, value in options.items():
        java_map.put(str(key), str(value))
    return java_map

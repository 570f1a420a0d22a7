"""CfrEngine behaviour that does not need a running JVM."""

from __future__ import annotations

from pathlib import Path

import pytest

from javadc_cli.errors import DecompilationFailed, EngineUnavailable
from javadc_cli.models import ResolutionResult
from javadc_cli.orchestrator import DecompileOrchestrator
from tests.helpers import make_class_bytes

jpype = pytest.importorskip("jpype")


def test_factory_does_not_start_the_jvm(tmp_path: Path):
    from javadc_cli.engine import create_cfr_engine

    engine = create_cfr_engine(tmp_path / "cfr.jar", jvm_path="/opt/jdk/libjvm.so")

    assert engine.name == "cfr"
    assert engine.cfr_jar == tmp_path / "cfr.jar"
    assert engine.jvm_path == "/opt/jdk/libjvm.so"


@pytest.mark.skipif(jpype.isJVMStarted(), reason="JVM already running in this process")
def test_missing_cfr_jar_is_engine_unavailable(tmp_path: Path):
    from javadc_cli.engine.cfr import CfrEngine

    engine = CfrEngine(tmp_path / "missing-cfr.jar")
    with pytest.raises(EngineUnavailable, match="CFR jar not found"):
        engine.ensure_started()


@pytest.mark.skipif(jpype.isJVMStarted(), reason="JVM already running in this process")
def test_engine_unavailable_is_a_decompilation_failure(tmp_path: Path):
    from javadc_cli.engine.cfr import CfrEngine

    orchestrator = DecompileOrchestrator(CfrEngine(tmp_path / "missing-cfr.jar"))
    result = ResolutionResult(internal_name="Foo", class_bytes=make_class_bytes())

    with pytest.raises(DecompilationFailed):
        orchestrator.decompile(result)

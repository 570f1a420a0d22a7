from __future__ import annotations

from pathlib import Path

import pytest

from javadc_cli.locator import Locator
from javadc_cli.mcp_utils.debug_logger import DebugLogger
from javadc_cli.service import DecompilerService
from tests.helpers import FakeEngine

_ENV_VARS = (
    "CLASSPATH",
    "JAVADC_CFR_JAR",
    "JAVADC_JVM_PATH",
    "JAVADC_HOST",
    "JAVADC_PORT",
    "JAVADC_DEBUG",
    "JAVADC_CLASSPATH_ENV",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def _reset_debug_logger():
    yield
    DebugLogger.set_debug_enabled(False)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def locator(tmp_path: Path, workspace_root: Path) -> Locator:
    return Locator(environ={}, cwd=lambda: str(tmp_path / "cwd"), workspace_root=workspace_root)


@pytest.fixture
def service(fake_engine: FakeEngine, locator: Locator) -> DecompilerService:
    return DecompilerService(fake_engine, locator=locator)

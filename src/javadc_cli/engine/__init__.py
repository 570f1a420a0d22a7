"""Decompiler engines.

``CfrEngine`` is imported lazily so that importing this package does not
require JPype unless CFR is actually used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import DecompilerEngine, SourceLookup

if TYPE_CHECKING:
    from pathlib import Path

    from .cfr import CfrEngine

__all__ = [
    "DecompilerEngine",
    "SourceLookup",
    "create_cfr_engine",
]


def create_cfr_engine(cfr_jar: Path, jvm_path: str | None = None) -> CfrEngine:
    from .cfr import CfrEngine

    return CfrEngine(cfr_jar, jvm_path=jvm_path)

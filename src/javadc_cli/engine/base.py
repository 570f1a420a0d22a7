from __future__ import annotations

from typing import Callable, Mapping, Optional, Protocol

# internal name (possibly with a ".class" suffix) -> class bytes, b"" placeholder, or None
SourceLookup = Callable[[str], Optional[bytes]]


class DecompilerEngine(Protocol):
    """External bytecode-to-source engine.

    Implementations pull class bytes on demand through ``source_lookup`` and
    raise on failure; callers wrap whatever they raise.
    """

    name: str

    def decompile(self, internal_name: str, source_lookup: SourceLookup, options: Mapping[str, str]) -> str: ...

from __future__ import annotations

from .parser import resolve_metadata
from .version import detect_odata_version

__all__ = [
    "resolve_metadata",
    "detect_odata_version",
]

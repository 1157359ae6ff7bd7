from __future__ import annotations

from collections.abc import Mapping

from ..types import ODataVersion

# ============================================================================
# OData version detection
#
# V4 documents declare Version="4.0" on the edmx root. V2/V3 documents carry
# edmx Version="1.0" and announce the data service version on the
# DataServices element (m:DataServiceVersion="2.0" / "3.0"). Some V2 services
# only send it as a response header.
# ============================================================================

_VERSION_MARKERS: list[tuple[str, ODataVersion]] = [
    ('Version="4.0"', "V4"),
    ('Version="2.0"', "V2"),
    ('Version="3.0"', "V3"),
]


def detect_odata_version(
    text: str | bytes,
    headers: Mapping[str, str] | None = None,
) -> ODataVersion:
    """Classify a metadata document by the version markers it carries."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")

    for marker, version in _VERSION_MARKERS:
        if marker in text:
            return version

    if headers:
        header = _header(headers, "DataServiceVersion")
        if header and header.startswith("2.0"):
            return "V2"

    return "Unknown"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup for plain dicts as well as httpx.Headers."""
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, val in headers.items():
        if key.lower() == lowered:
            return val
    return None

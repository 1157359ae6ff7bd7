"""Error hierarchy for the metadata → graph pipeline.

None of these escape the public pipeline entry points; they are raised at
the lowest layer and turned into an empty graph at the boundary.
"""
from __future__ import annotations


class ODataGraphError(Exception):
    """Base for all odata-graph errors."""


class TransportFailure(ODataGraphError):
    """The metadata document could not be fetched (network error or non-2xx)."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class MalformedMetadata(ODataGraphError):
    """The document is not XML or has no recognizable schema container."""


class LayoutEngineFailure(ODataGraphError):
    """The external layout engine raised or returned unusable geometry."""

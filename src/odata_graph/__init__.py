"""odata-graph — Turn OData metadata documents into interactive relationship graphs."""

from __future__ import annotations

from .types import (
    EntityType,
    FocusState,
    LayoutOptions,
    MetadataSchema,
    PositionedGraph,
    VisualDirective,
)
from .errors import LayoutEngineFailure, MalformedMetadata, ODataGraphError, TransportFailure
from .theme import FocusColors, RELATIONSHIP_PALETTE
from .metadata import detect_odata_version, resolve_metadata
from .fetch import fetch_metadata, metadata_url
from .graph import build_layout_request, finalize_graph, prepare_graph
from .layout_engine import GrandalfLayoutEngine, LayoutEngine
from .focus import compute_directive, focus, reset_focus
from .pipeline import build_graph
from .explorer import MetadataExplorer

__all__ = [
    "build_graph",
    "resolve_metadata",
    "detect_odata_version",
    "fetch_metadata",
    "metadata_url",
    "prepare_graph",
    "build_layout_request",
    "finalize_graph",
    "compute_directive",
    "focus",
    "reset_focus",
    "GrandalfLayoutEngine",
    "LayoutEngine",
    "MetadataExplorer",
    "EntityType",
    "FocusState",
    "LayoutOptions",
    "MetadataSchema",
    "PositionedGraph",
    "VisualDirective",
    "FocusColors",
    "RELATIONSHIP_PALETTE",
    "ODataGraphError",
    "TransportFailure",
    "MalformedMetadata",
    "LayoutEngineFailure",
]

from __future__ import annotations

import logging

from .errors import LayoutEngineFailure
from .graph import build_layout_request, finalize_graph, prepare_graph
from .layout_engine import GrandalfLayoutEngine, LayoutEngine
from .metadata import resolve_metadata
from .types import LayoutOptions, LayoutRequest, LayoutResult, PositionedGraph, PreparedGraph

logger = logging.getLogger(__name__)


def build_graph(
    text: str | bytes,
    engine: LayoutEngine | None = None,
    options: LayoutOptions | None = None,
) -> PositionedGraph:
    """Resolve a metadata document and lay it out in one synchronous call.

    Malformed metadata and layout failures both yield an empty graph.
    """
    prepared, request = prepare_layout(text, options)
    engine = engine or GrandalfLayoutEngine()
    try:
        result = run_layout(engine, request)
    except LayoutEngineFailure as err:
        logger.warning("Layout failed: %s", err)
        return PositionedGraph()
    return finalize_graph(prepared, result, options)


def prepare_layout(
    text: str | bytes,
    options: LayoutOptions | None = None,
) -> tuple[PreparedGraph, LayoutRequest]:
    """Resolve and prepare, stopping right before the layout call."""
    schema = resolve_metadata(text)
    prepared = prepare_graph(schema.entities)
    return prepared, build_layout_request(prepared, options)


def run_layout(engine: LayoutEngine, request: LayoutRequest) -> LayoutResult:
    """Call ``engine.layout``; any error it raises surfaces as LayoutEngineFailure."""
    try:
        return engine.layout(request)
    except LayoutEngineFailure:
        raise
    except Exception as err:
        raise LayoutEngineFailure(f"{type(err).__name__}: {err}") from err

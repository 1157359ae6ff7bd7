from __future__ import annotations

import logging

from ..config import merge_options
from ..styles import RENDER_SIZING
from ..types import (
    LayoutOptions,
    LayoutResult,
    NodeGeometry,
    Point,
    Port,
    PositionedEdge,
    PositionedGraph,
    PositionedNode,
    PreparedGraph,
    Side,
)
from .builder import port_ids
from .sizing import box_size

logger = logging.getLogger(__name__)

# ============================================================================
# Relationship graph builder — post-layout phase
#
# Reads the engine's geometry back onto the prepared graph:
#   1. Node positions, plus the (smaller) drawn size
#   2. A discrete side for every edge endpoint, either classified from the
#      engine's free port placement or chosen by the docking heuristic
#   3. Edges whose endpoints lack geometry are dropped
# ============================================================================


def finalize_graph(
    prepared: PreparedGraph,
    result: LayoutResult,
    options: LayoutOptions | None = None,
) -> PositionedGraph:
    """Combine a prepared graph with the layout engine's result."""
    opts = merge_options(options)
    free_ports = opts["port_mode"] == "free"

    positioned: dict[str, PositionedNode] = {}
    for node in prepared.nodes:
        geom = result.nodes.get(node.id)
        if geom is None:
            logger.warning("Layout result has no geometry for node %r; dropped", node.id)
            continue
        positioned[node.id] = PositionedNode(
            id=node.id,
            label=node.label,
            position=Point(x=geom.x, y=geom.y),
            render_size=box_size(
                node.label,
                node.visible_properties,
                node.visible_navigation,
                node.hidden_property_count + node.hidden_navigation_count > 0,
                RENDER_SIZING,
            ),
            keys=list(node.keys),
            visible_properties=list(node.visible_properties),
            visible_navigation=list(node.visible_navigation),
            hidden_property_count=node.hidden_property_count,
            hidden_navigation_count=node.hidden_navigation_count,
            field_colors=dict(node.field_colors),
        )

    edges: list[PositionedEdge] = []
    for edge in prepared.edges:
        if edge.source not in positioned or edge.target not in positioned:
            logger.warning("Edge %r references a node without geometry; dropped", edge.id)
            continue
        src_geom = result.nodes[edge.source]
        tgt_geom = result.nodes[edge.target]
        source_port, target_port = port_ids(edge.id)

        source_side, target_side = docking_sides(
            src_geom,
            tgt_geom,
            strategy=opts["docking_strategy"],
            threshold=float(opts["docking_threshold"]),
        )
        if free_ports:
            tolerance = float(opts["port_tolerance"])
            src_rel = result.ports.get(source_port)
            tgt_rel = result.ports.get(target_port)
            if src_rel is not None:
                source_side = classify_port_side(src_rel, src_geom.width, src_geom.height, tolerance)
            if tgt_rel is not None:
                target_side = classify_port_side(tgt_rel, tgt_geom.width, tgt_geom.height, tolerance)

        source_field, target_field = (
            edge.field_constraints[0] if edge.field_constraints else (None, None)
        )
        positioned[edge.source].ports.append(
            Port(id=source_port, role="source", side=source_side, field_name=source_field)
        )
        positioned[edge.target].ports.append(
            Port(id=target_port, role="target", side=target_side, field_name=target_field)
        )

        edges.append(
            PositionedEdge(
                id=edge.id,
                source=edge.source,
                target=edge.target,
                label=edge.label,
                color_key=edge.color_key,
                color=edge.color,
                source_port=source_port,
                target_port=target_port,
                source_side=source_side,
                target_side=target_side,
                field_constraints=list(edge.field_constraints),
            )
        )

    return PositionedGraph(
        width=result.width,
        height=result.height,
        nodes=list(positioned.values()),
        edges=edges,
    )


# ============================================================================
# Side resolution
# ============================================================================


def classify_port_side(point: Point, width: float, height: float, tolerance: float = 2.0) -> Side:
    """Map a port position (relative to the node's top-left) to a node side.

    Vertical sides are tested first so corner ports resolve to left/right.
    A port off the boundary snaps to the nearest side.
    """
    if abs(point.x) <= tolerance:
        return "left"
    if abs(point.x - width) <= tolerance:
        return "right"
    if abs(point.y) <= tolerance:
        return "top"
    if abs(point.y - height) <= tolerance:
        return "bottom"

    distances: list[tuple[float, Side]] = [
        (abs(point.x), "left"),
        (abs(width - point.x), "right"),
        (abs(point.y), "top"),
        (abs(height - point.y), "bottom"),
    ]
    return min(distances, key=lambda d: d[0])[1]


def docking_sides(
    source: NodeGeometry,
    target: NodeGeometry,
    strategy: str = "horizontal",
    threshold: float = 150.0,
) -> tuple[Side, Side]:
    """Pick fixed docking sides for an edge from its endpoints' positions.

    Nodes whose horizontal centers are closer than ``threshold`` are roughly
    stacked; both ends then dock on the right so the edge loops around the
    column instead of running straight through whatever sits between them.
    """
    scx = source.x + source.width / 2
    tcx = target.x + target.width / 2

    if abs(scx - tcx) < threshold:
        return "right", "right"

    if strategy == "vertical":
        scy = source.y + source.height / 2
        tcy = target.y + target.height / 2
        return ("bottom", "top") if scy <= tcy else ("top", "bottom")

    return ("right", "left") if scx < tcx else ("left", "right")

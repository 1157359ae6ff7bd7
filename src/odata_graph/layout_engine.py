from __future__ import annotations

import logging
from typing import Protocol

from grandalf.graphs import Edge, Graph, Vertex
from grandalf.layouts import SugiyamaLayout

from .config import LAYOUT_DEFAULTS
from .errors import LayoutEngineFailure
from .geometry import NodeRect, center_to_top_left, clip_to_rect_boundary
from .types import LayoutRequest, LayoutResult, NodeGeometry, Point

logger = logging.getLogger(__name__)

# ============================================================================
# External layout engine boundary
#
# The pipeline only depends on the LayoutEngine protocol: nodes with sizes
# and optional named ports go in, top-left geometry and port positions
# (relative to each node) come out. GrandalfLayoutEngine is the default
# implementation; its placement decisions are grandalf's.
# ============================================================================


class LayoutEngine(Protocol):
    def layout(self, request: LayoutRequest) -> LayoutResult: ...


# ============================================================================
# Vertex view for grandalf -- provides width/height for layout
# ============================================================================


class _VertexView:
    """Minimal view object required by grandalf's SugiyamaLayout."""

    def __init__(self, w: float = 60, h: float = 36) -> None:
        self.w = w
        self.h = h
        # xy is set by the layout engine (center coordinates)
        self.xy = (0.0, 0.0)


class GrandalfLayoutEngine:
    """Sugiyama layered layout via grandalf.

    grandalf only lays out one connected component at a time, so each
    component is laid out on its own and the results are stacked across
    the layering axis.
    """

    def __init__(self, padding: float | None = None) -> None:
        self.padding = float(LAYOUT_DEFAULTS["padding"] if padding is None else padding)

    def layout(self, request: LayoutRequest) -> LayoutResult:
        if not request.nodes:
            return LayoutResult()

        directives = request.directives
        horizontal = directives.get("direction", LAYOUT_DEFAULTS["direction"]) == "RIGHT"
        node_spacing = float(directives.get("node_spacing", LAYOUT_DEFAULTS["node_spacing"]))
        layer_spacing = float(directives.get("layer_spacing", LAYOUT_DEFAULTS["layer_spacing"]))

        # 1. Build grandalf graph. grandalf stacks layers along its y-axis, so
        #    a left-to-right layout swaps width and height going in.
        sizes: dict[str, tuple[float, float]] = {}
        vertices: dict[str, Vertex] = {}
        for node in request.nodes:
            sizes[node.id] = (node.width, node.height)
            v = Vertex(node.id)
            if horizontal:
                v.view = _VertexView(node.height, node.width)
            else:
                v.view = _VertexView(node.width, node.height)
            vertices[node.id] = v

        edges_list: list[Edge] = []
        for edge in request.edges:
            src_v = vertices.get(edge.sources[0]) if edge.sources else None
            tgt_v = vertices.get(edge.targets[0]) if edge.targets else None
            if src_v is None or tgt_v is None or src_v is tgt_v:
                logger.debug("Edge %r has no usable endpoints; not laid out", edge.id)
                continue
            edges_list.append(Edge(src_v, tgt_v))

        g = Graph(list(vertices.values()), edges_list)
        # Stack components in the order their first node was requested
        order = {node.id: i for i, node in enumerate(request.nodes)}
        components = sorted(g.C, key=lambda c: min(order[v.data] for v in c.sV))

        # 2. Run Sugiyama per connected component
        try:
            for component in components:
                sug = SugiyamaLayout(component)
                sug.xspace = node_spacing
                sug.yspace = layer_spacing
                sug.init_all()
                sug.draw()
        except Exception as err:
            raise LayoutEngineFailure(f"Grandalf layout failed: {err}") from err

        # 3. Extract top-left geometry, stacking components
        geometry: dict[str, NodeGeometry] = {}
        offset = self.padding
        for component in components:
            boxes: dict[str, NodeGeometry] = {}
            for v in component.sV:
                node_id = v.data
                w, h = sizes[node_id]
                # LR direction: grandalf's y-axis is our x-axis
                cx, cy = (v.view.xy[1], v.view.xy[0]) if horizontal else v.view.xy
                top_left = center_to_top_left(cx, cy, w, h)
                boxes[node_id] = NodeGeometry(x=top_left.x, y=top_left.y, width=w, height=h)

            min_x = min(b.x for b in boxes.values())
            min_y = min(b.y for b in boxes.values())
            if horizontal:
                dx, dy = self.padding - min_x, offset - min_y
            else:
                dx, dy = offset - min_x, self.padding - min_y
            for box in boxes.values():
                box.x += dx
                box.y += dy

            if horizontal:
                offset = max(b.y + b.height for b in boxes.values()) + node_spacing
            else:
                offset = max(b.x + b.width for b in boxes.values()) + node_spacing
            geometry.update(boxes)

        # 4. Place requested ports where the straight line between the two
        #    node centers crosses each node's boundary
        ports: dict[str, Point] = {}
        for edge in request.edges:
            if not edge.sources or not edge.targets:
                continue
            src = geometry.get(edge.sources[0])
            tgt = geometry.get(edge.targets[0])
            if src is None or tgt is None:
                continue
            if edge.source_port:
                ports[edge.source_port] = _port_position(src, tgt)
            if edge.target_port:
                ports[edge.target_port] = _port_position(tgt, src)

        width = max(b.x + b.width for b in geometry.values()) + self.padding
        height = max(b.y + b.height for b in geometry.values()) + self.padding

        return LayoutResult(width=width, height=height, nodes=geometry, ports=ports)


def _port_position(node: NodeGeometry, other: NodeGeometry) -> Point:
    """Port position on ``node``'s boundary facing ``other``, relative to its top-left."""
    rect = NodeRect(
        cx=node.x + node.width / 2,
        cy=node.y + node.height / 2,
        hw=node.width / 2,
        hh=node.height / 2,
    )
    toward = Point(x=other.x + other.width / 2, y=other.y + other.height / 2)
    p = clip_to_rect_boundary(rect, toward)
    return Point(x=p.x - node.x, y=p.y - node.y)

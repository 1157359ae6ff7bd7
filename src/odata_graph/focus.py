from __future__ import annotations

import logging

from .theme import DEFAULT_FOCUS_COLORS, FocusColors
from .types import EdgeStyle, FocusState, NodeStyle, PositionedGraph, VisualDirective

logger = logging.getLogger(__name__)

# ============================================================================
# Focus / highlight state machine
#
#   Neutral ──select(n)──▶ Focused(n) ──select(m)──▶ Focused(m)
#      ▲                        │
#      └─────────reset──────────┘
#
# State is a frozen FocusState; the visual directive is recomputed from
# (graph, state) on every change and never patched in place. Selecting the
# already-focused node yields the identical directive.
# ============================================================================

NEUTRAL = FocusState()


def focus(state: FocusState, graph: PositionedGraph, node_id: str) -> FocusState:
    """Transition to Focused(node_id). Unknown node ids leave the state as is."""
    if not any(n.id == node_id for n in graph.nodes):
        logger.debug("Ignoring focus on unknown node %r", node_id)
        return state
    return FocusState(focused_node_id=node_id)


def reset_focus(state: FocusState) -> FocusState:
    return NEUTRAL


def related_edge_ids(graph: PositionedGraph, node_id: str) -> set[str]:
    return {e.id for e in graph.edges if e.source == node_id or e.target == node_id}


def related_node_ids(graph: PositionedGraph, node_id: str) -> set[str]:
    related = {node_id}
    for e in graph.edges:
        if e.source == node_id or e.target == node_id:
            related.add(e.source)
            related.add(e.target)
    return related


def compute_directive(
    graph: PositionedGraph,
    state: FocusState,
    colors: FocusColors | None = None,
) -> VisualDirective:
    """Visual emphasis for every node and edge under the given focus state."""
    colors = colors or DEFAULT_FOCUS_COLORS
    focused = state.focused_node_id

    if focused is None or not any(n.id == focused for n in graph.nodes):
        return _neutral_directive(graph, colors)

    nodes_in = related_node_ids(graph, focused)
    edges_in = related_edge_ids(graph, focused)

    directive = VisualDirective(focused_node_id=focused)
    for node in graph.nodes:
        if node.id == focused:
            directive.nodes[node.id] = NodeStyle(emphasis="focused", opacity=1.0, saturation=1.0)
        elif node.id in nodes_in:
            directive.nodes[node.id] = NodeStyle(emphasis="related", opacity=1.0, saturation=1.0)
        else:
            directive.nodes[node.id] = NodeStyle(
                emphasis="dimmed",
                opacity=colors.node_dim_opacity,
                saturation=colors.node_dim_saturation,
            )

    for edge in graph.edges:
        if edge.id in edges_in:
            directive.edges[edge.id] = EdgeStyle(
                color=edge.color,
                width=colors.edge_focus_width,
                opacity=1.0,
                label_visible=True,
            )
        else:
            # Hidden label, not just faded
            directive.edges[edge.id] = EdgeStyle(
                color=edge.color,
                width=colors.edge_width,
                opacity=colors.edge_dim_opacity,
                label_visible=False,
                dimmed=True,
            )
    return directive


def _neutral_directive(graph: PositionedGraph, colors: FocusColors) -> VisualDirective:
    directive = VisualDirective()
    for node in graph.nodes:
        directive.nodes[node.id] = NodeStyle(emphasis="base", opacity=1.0, saturation=1.0)
    for edge in graph.edges:
        directive.edges[edge.id] = EdgeStyle(
            color=edge.color,
            width=colors.edge_width,
            opacity=1.0,
            label_visible=colors.labels_visible,
        )
    return directive

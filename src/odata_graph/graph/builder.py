from __future__ import annotations

import logging
import zlib

from ..config import DIRECTIVE_KEYS, merge_options
from ..styles import LAYOUT_SIZING, MAX_VISIBLE_NAVIGATION, MAX_VISIBLE_PROPERTIES
from ..theme import RELATIONSHIP_PALETTE
from ..types import (
    EntityType,
    GraphNode,
    LayoutEdge,
    LayoutNode,
    LayoutOptions,
    LayoutRequest,
    NavigationProperty,
    PreparedGraph,
    RelationshipEdge,
)
from .sizing import box_size

logger = logging.getLogger(__name__)

# ============================================================================
# Relationship graph builder — pre-layout phase
#
# One node per entity, one edge per unordered entity pair. A pair declared
# from both sides (Customer.Orders and Order.Customer) yields a single edge;
# the second declaration only contributes its field coloring.
# ============================================================================


def prepare_graph(entities: list[EntityType]) -> PreparedGraph:
    """Build nodes, deduplicated edges and field colors for a schema."""
    known = {e.name for e in entities}
    field_names = {e.name: {p.name for p in e.properties} for e in entities}
    field_colors: dict[str, dict[str, str]] = {e.name: {} for e in entities}

    edges: list[RelationshipEdge] = []
    by_pair: dict[str, RelationshipEdge] = {}

    for entity in entities:
        for nav in entity.navigation_properties:
            target = nav.target_type_name
            if target is None or target not in known or target == entity.name:
                continue

            key = pair_key(entity.name, target)
            color_key = pair_color_index(key)
            color = RELATIONSHIP_PALETTE[color_key]

            for source_field, target_field in nav.field_constraints:
                if source_field in field_names[entity.name]:
                    field_colors[entity.name][source_field] = color
                if target_field in field_names[target]:
                    field_colors[target][target_field] = color

            existing = by_pair.get(key)
            if existing is not None:
                # Reverse declaration of a known pair: no new edge, but the
                # edge picks up its constraint if it had none of its own
                if not existing.field_constraints and nav.field_constraints:
                    existing.field_constraints = _orient(existing, entity.name, nav)
                continue

            edge = RelationshipEdge(
                id=edge_id(entity.name, target),
                source=entity.name,
                target=target,
                label=edge_label(entity.name, target, nav),
                color_key=color_key,
                color=color,
                navigation_name=nav.name,
                field_constraints=list(nav.field_constraints),
            )
            by_pair[key] = edge
            edges.append(edge)

    nodes = [_build_node(e, field_colors[e.name]) for e in entities]
    logger.debug("Prepared %d nodes and %d edges", len(nodes), len(edges))
    return PreparedGraph(nodes=nodes, edges=edges, field_colors=field_colors)


def _orient(
    edge: RelationshipEdge, nav_source: str, nav: NavigationProperty
) -> list[tuple[str, str]]:
    """Express a navigation's constraint pairs in the edge's direction."""
    if nav_source == edge.source:
        return list(nav.field_constraints)
    return [(tgt, src) for src, tgt in nav.field_constraints]


def _build_node(entity: EntityType, colors: dict[str, str]) -> GraphNode:
    visible_props = entity.properties[:MAX_VISIBLE_PROPERTIES]
    visible_navs = [n.name for n in entity.navigation_properties[:MAX_VISIBLE_NAVIGATION]]
    hidden_props = len(entity.properties) - len(visible_props)
    hidden_navs = len(entity.navigation_properties) - len(visible_navs)

    return GraphNode(
        id=entity.name,
        label=entity.name,
        size_hint=box_size(
            entity.name,
            visible_props,
            visible_navs,
            hidden_props + hidden_navs > 0,
            LAYOUT_SIZING,
        ),
        keys=list(entity.keys),
        visible_properties=list(visible_props),
        visible_navigation=visible_navs,
        hidden_property_count=hidden_props,
        hidden_navigation_count=hidden_navs,
        field_colors=colors,
    )


# ============================================================================
# Relationship identity
# ============================================================================


def pair_key(a: str, b: str) -> str:
    """Order-independent key for an entity pair."""
    first, second = sorted((a, b))
    return f"{first}|{second}"


def pair_color_index(key: str) -> int:
    """Palette index for a pair key; stable across runs and processes."""
    return zlib.crc32(key.encode("utf-8")) % len(RELATIONSHIP_PALETTE)


def edge_id(a: str, b: str) -> str:
    first, second = sorted((a, b))
    return f"{first}--{second}"


def port_ids(edge: str) -> tuple[str, str]:
    """Port ids for an edge's source and target endpoints."""
    return f"{edge}:source", f"{edge}:target"


def edge_label(source: str, target: str, nav: NavigationProperty) -> str:
    if nav.source_multiplicity and nav.target_multiplicity:
        return f"{nav.name} ({nav.source_multiplicity} : {nav.target_multiplicity})"
    return f"{source} - {target}"


# ============================================================================
# Layout request
# ============================================================================


def build_layout_request(
    prepared: PreparedGraph,
    options: LayoutOptions | None = None,
) -> LayoutRequest:
    """Describe the prepared graph in the layout engine's terms.

    In "free" port mode every edge endpoint gets a named port on its node so
    the engine can place it anywhere on the boundary.
    """
    opts = merge_options(options)
    free_ports = opts["port_mode"] == "free"

    layout_nodes = {
        n.id: LayoutNode(id=n.id, width=n.size_hint.width, height=n.size_hint.height)
        for n in prepared.nodes
    }

    layout_edges: list[LayoutEdge] = []
    for edge in prepared.edges:
        source_port, target_port = port_ids(edge.id)
        if free_ports:
            layout_nodes[edge.source].ports.append(source_port)
            layout_nodes[edge.target].ports.append(target_port)
        layout_edges.append(
            LayoutEdge(
                id=edge.id,
                sources=[edge.source],
                targets=[edge.target],
                source_port=source_port if free_ports else None,
                target_port=target_port if free_ports else None,
            )
        )

    return LayoutRequest(
        nodes=list(layout_nodes.values()),
        edges=layout_edges,
        directives={key: str(opts[key]) for key in DIRECTIVE_KEYS},
    )

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

# ============================================================================
# Normalized schema — dialect-independent view of an OData metadata document
# ============================================================================

ODataVersion = Literal["V2", "V3", "V4", "Unknown"]

# Multiplicity markers as they appear in V2/V3 association ends:
#   '1'     exactly one
#   '0..1'  zero or one
#   '*'     many
Multiplicity = Literal["1", "0..1", "*"]


@dataclass(slots=True)
class Property:
    name: str
    type: str


@dataclass(slots=True)
class NavigationProperty:
    """A declared relationship from one entity type to another."""

    name: str
    # Bare entity type name, or None when the target could not be resolved
    target_type_name: str | None
    # V2/V3 only: the Relationship attribute as declared
    relationship_ref: str | None = None
    to_role: str | None = None
    from_role: str | None = None
    source_multiplicity: Multiplicity | None = None
    target_multiplicity: Multiplicity | None = None
    # V4 only: name of the inverse navigation on the target entity
    partner: str | None = None
    # (source_field, target_field) pairs from the referential constraint
    field_constraints: list[tuple[str, str]] = field(default_factory=list)


@dataclass(slots=True)
class EntityType:
    name: str
    keys: list[str] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)
    navigation_properties: list[NavigationProperty] = field(default_factory=list)


@dataclass(slots=True)
class MetadataSchema:
    entities: list[EntityType] = field(default_factory=list)
    namespace: str | None = None
    version: ODataVersion = "Unknown"


@dataclass(slots=True)
class MetadataDocument:
    """Raw metadata as fetched from a service."""

    url: str
    text: str
    version: ODataVersion


# ============================================================================
# Relationship graph — pre-layout
# ============================================================================

PortRole = Literal["source", "target"]
Side = Literal["top", "right", "bottom", "left"]


@dataclass(slots=True)
class Point:
    x: float
    y: float


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass(slots=True)
class GraphNode:
    id: str
    label: str
    size_hint: Size
    keys: list[str] = field(default_factory=list)
    # Rows actually shown in the box (already capped)
    visible_properties: list[Property] = field(default_factory=list)
    visible_navigation: list[str] = field(default_factory=list)
    hidden_property_count: int = 0
    hidden_navigation_count: int = 0
    # property name -> relationship color
    field_colors: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class RelationshipEdge:
    """One undirected relationship between two distinct entities."""

    id: str
    source: str
    target: str
    label: str
    # Index into the relationship palette, stable per unordered pair
    color_key: int
    color: str
    navigation_name: str
    field_constraints: list[tuple[str, str]] = field(default_factory=list)


@dataclass(slots=True)
class PreparedGraph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[RelationshipEdge] = field(default_factory=list)
    # entity name -> property name -> color
    field_colors: dict[str, dict[str, str]] = field(default_factory=dict)


# ============================================================================
# Layout engine boundary
# ============================================================================


@dataclass(slots=True)
class LayoutNode:
    id: str
    width: float
    height: float
    ports: list[str] = field(default_factory=list)


@dataclass(slots=True)
class LayoutEdge:
    id: str
    sources: list[str]
    targets: list[str]
    source_port: str | None = None
    target_port: str | None = None


@dataclass(slots=True)
class LayoutRequest:
    nodes: list[LayoutNode] = field(default_factory=list)
    edges: list[LayoutEdge] = field(default_factory=list)
    directives: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class NodeGeometry:
    """Top-left position and size of a laid-out node."""

    x: float
    y: float
    width: float
    height: float


@dataclass(slots=True)
class LayoutResult:
    width: float = 0
    height: float = 0
    nodes: dict[str, NodeGeometry] = field(default_factory=dict)
    # port id -> position relative to its node's top-left corner
    ports: dict[str, Point] = field(default_factory=dict)


# ============================================================================
# Positioned graph — after layout, ready for the rendering layer
# ============================================================================


@dataclass(slots=True)
class Port:
    id: str
    role: PortRole
    side: Side
    field_name: str | None = None


@dataclass(slots=True)
class PositionedNode:
    id: str
    label: str
    position: Point
    render_size: Size
    keys: list[str] = field(default_factory=list)
    visible_properties: list[Property] = field(default_factory=list)
    visible_navigation: list[str] = field(default_factory=list)
    hidden_property_count: int = 0
    hidden_navigation_count: int = 0
    field_colors: dict[str, str] = field(default_factory=dict)
    ports: list[Port] = field(default_factory=list)


@dataclass(slots=True)
class PositionedEdge:
    id: str
    source: str
    target: str
    label: str
    color_key: int
    color: str
    source_port: str
    target_port: str
    source_side: Side
    target_side: Side
    field_constraints: list[tuple[str, str]] = field(default_factory=list)


@dataclass(slots=True)
class PositionedGraph:
    width: float = 0
    height: float = 0
    nodes: list[PositionedNode] = field(default_factory=list)
    edges: list[PositionedEdge] = field(default_factory=list)


# ============================================================================
# Focus / highlight
# ============================================================================


@dataclass(frozen=True, slots=True)
class FocusState:
    focused_node_id: str | None = None


NodeEmphasis = Literal["base", "focused", "related", "dimmed"]


@dataclass(slots=True)
class NodeStyle:
    emphasis: NodeEmphasis
    opacity: float
    saturation: float


@dataclass(slots=True)
class EdgeStyle:
    color: str
    width: float
    opacity: float
    label_visible: bool
    dimmed: bool = False


@dataclass(slots=True)
class VisualDirective:
    focused_node_id: str | None = None
    nodes: dict[str, NodeStyle] = field(default_factory=dict)
    edges: dict[str, EdgeStyle] = field(default_factory=dict)


# ============================================================================
# Layout options — user-facing configuration
# ============================================================================

LayoutDirection = Literal["RIGHT", "DOWN"]
PortMode = Literal["free", "docking"]
DockingStrategy = Literal["horizontal", "vertical"]


@dataclass(slots=True)
class LayoutOptions:
    direction: LayoutDirection | None = None
    node_spacing: int | None = None
    layer_spacing: int | None = None
    edge_routing: str | None = None
    padding: int | None = None
    port_mode: PortMode | None = None
    docking_strategy: DockingStrategy | None = None
    docking_threshold: float | None = None
    port_tolerance: float | None = None

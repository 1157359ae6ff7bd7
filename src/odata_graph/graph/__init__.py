from __future__ import annotations

from .builder import (
    build_layout_request,
    edge_id,
    edge_label,
    pair_color_index,
    pair_key,
    prepare_graph,
)
from .finalize import classify_port_side, docking_sides, finalize_graph

__all__ = [
    "prepare_graph",
    "build_layout_request",
    "finalize_graph",
    "classify_port_side",
    "docking_sides",
    "pair_key",
    "pair_color_index",
    "edge_id",
    "edge_label",
]

from __future__ import annotations

from dataclasses import dataclass

# ============================================================================
# Relationship palette
#
# Each unordered entity pair hashes into this list. Order matters: changing
# it changes every pair's color, so append rather than reorder.
# ============================================================================

RELATIONSHIP_PALETTE: list[str] = [
    "#3b82f6",  # blue
    "#ef4444",  # red
    "#10b981",  # emerald
    "#f59e0b",  # amber
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#14b8a6",  # teal
    "#f97316",  # orange
    "#6366f1",  # indigo
    "#84cc16",  # lime
    "#06b6d4",  # cyan
    "#a855f7",  # purple
]


# ============================================================================
# Focus colors
# ============================================================================


@dataclass(slots=True)
class FocusColors:
    """Emphasis values applied by the focus/highlight directives.

    Edges keep their relationship color in both states; only width, opacity
    and label visibility change.
    """

    edge_width: float = 1.0
    edge_focus_width: float = 2.5
    # Opacity of edges not touching the focused node (near-invisible)
    edge_dim_opacity: float = 0.05
    node_dim_opacity: float = 0.2
    node_dim_saturation: float = 0.0
    # Whether edge labels show in the neutral state
    labels_visible: bool = True


DEFAULT_FOCUS_COLORS = FocusColors()

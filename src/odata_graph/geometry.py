from __future__ import annotations

from dataclasses import dataclass

from .types import Point

# ============================================================================
# Geometry helpers shared by the layout adapter
# ============================================================================


@dataclass(slots=True)
class NodeRect:
    """Node rectangle — uses center-based coordinates."""

    cx: float
    cy: float
    hw: float
    hh: float


def center_to_top_left(cx: float, cy: float, width: float, height: float) -> Point:
    """Convert center-based coordinates to top-left origin."""
    return Point(x=cx - width / 2, y=cy - height / 2)


def clip_to_rect_boundary(rect: NodeRect, toward: Point) -> Point:
    """Point where the ray from the rectangle's center toward ``toward`` leaves it.

    Coincident centers fall back to the middle of the right side.
    """
    dx = toward.x - rect.cx
    dy = toward.y - rect.cy
    if abs(dx) < 0.5 and abs(dy) < 0.5:
        return Point(x=rect.cx + rect.hw, y=rect.cy)

    scales: list[float] = []
    if abs(dx) >= 0.5:
        scales.append(rect.hw / abs(dx))
    if abs(dy) >= 0.5:
        scales.append(rect.hh / abs(dy))
    scale = min(scales)
    return Point(x=rect.cx + scale * dx, y=rect.cy + scale * dy)

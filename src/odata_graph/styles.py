from __future__ import annotations

# ============================================================================
# Font metrics — character width estimates for Inter at different sizes.
# ============================================================================


def estimate_text_width(text: str, font_size: float, font_weight: int) -> float:
    """Average character width in px at the given font size and weight (proportional font)."""
    if font_weight >= 600:
        width_ratio = 0.58
    elif font_weight >= 500:
        width_ratio = 0.55
    else:
        width_ratio = 0.52
    return len(text) * font_size * width_ratio


def estimate_mono_text_width(text: str, font_size: float) -> float:
    """Average character width in px for monospace fonts (uniform glyph width)."""
    return len(text) * font_size * 0.6


# Fixed font sizes (px)
FONT_SIZES = {
    "entity_label": 13,
    "field": 11,
}

# Font weights per element type
FONT_WEIGHTS = {
    "entity_label": 700,
    "field": 400,
}

# ============================================================================
# Entity box sizing
#
# Two row formulas share the same caps. The layout hint is deliberately
# taller and wider than the drawn box so the layout engine keeps clearance
# around every entity and edges do not cut through node bodies.
# ============================================================================

# Visible row caps — anything beyond collapses into a "...more" row
MAX_VISIBLE_PROPERTIES = 12
MAX_VISIBLE_NAVIGATION = 8

LAYOUT_SIZING = {
    "header": 48,
    "row": 28,
    "footer": 40,
    "pad_x": 40,
    "min_width": 220,
}

RENDER_SIZING = {
    "header": 32,
    "row": 20,
    "footer": 8,
    "pad_x": 12,
    "min_width": 150,
}

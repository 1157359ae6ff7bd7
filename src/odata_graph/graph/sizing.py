from __future__ import annotations

from ..styles import FONT_SIZES, FONT_WEIGHTS, estimate_mono_text_width, estimate_text_width
from ..types import Property, Size

# ============================================================================
# Entity box sizing
#
# Each entity box has:
#   1. Header (entity name)
#   2. Property rows (name + short type), capped
#   3. Navigation rows (navigation name), capped
#   4. One "...more" row if anything was cut
#   5. Footer allowance
#
# The same formula runs twice with different constants: once for the layout
# hint, once for the drawn size.
# ============================================================================


def box_size(
    label: str,
    properties: list[Property],
    navigation: list[str],
    truncated: bool,
    sizing: dict[str, float],
) -> Size:
    """Compute a box size from the rows that will actually be shown."""
    header_w = estimate_text_width(
        label, FONT_SIZES["entity_label"], FONT_WEIGHTS["entity_label"]
    )

    max_row_w = 0.0
    for prop in properties:
        w = estimate_mono_text_width(_row_text(prop), FONT_SIZES["field"])
        if w > max_row_w:
            max_row_w = w
    for name in navigation:
        w = estimate_mono_text_width(name, FONT_SIZES["field"])
        if w > max_row_w:
            max_row_w = w

    rows = len(properties) + len(navigation) + (1 if truncated else 0)

    width = max(
        sizing["min_width"],
        header_w + sizing["pad_x"] * 2,
        max_row_w + sizing["pad_x"] * 2,
    )
    height = sizing["header"] + rows * sizing["row"] + sizing["footer"]
    return Size(width=width, height=height)


def _row_text(prop: Property) -> str:
    # "Edm.String" -> "String"
    short_type = prop.type.rsplit(".", 1)[-1]
    return f"{prop.name}  {short_type}" if short_type else prop.name

from __future__ import annotations

from dataclasses import fields

from .types import LayoutOptions

# Layout defaults. direction/spacing/routing are passed to the layout engine
# as named directives; the rest steer how its output is interpreted.
LAYOUT_DEFAULTS = {
    "direction": "RIGHT",
    "node_spacing": 80,
    "layer_spacing": 100,
    "edge_routing": "ORTHOGONAL",
    "padding": 40,
    # "free": one port per relationship endpoint, placed by the engine
    # "docking": fixed sides chosen from node positions after layout
    "port_mode": "free",
    "docking_strategy": "horizontal",
    "docking_threshold": 150.0,
    "port_tolerance": 2.0,
}

# Keys forwarded verbatim to the layout engine
DIRECTIVE_KEYS = ("direction", "node_spacing", "layer_spacing", "edge_routing")


def merge_options(options: LayoutOptions | None) -> dict:
    """Overlay the non-None fields of ``options`` on top of LAYOUT_DEFAULTS."""
    opts = dict(LAYOUT_DEFAULTS)
    if options:
        for f in fields(options):
            value = getattr(options, f.name)
            if value is not None:
                opts[f.name] = value
    return opts

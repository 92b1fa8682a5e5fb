from .engine import MAX_BRIDGES, MAX_PIXELS, SKIPPED, BridgeContext, apply_auto_bridges, apply_auto_bridges_rgba
from .finder import BRIDGE_DIRECTIONS, BridgeCandidate, Direction, find_bridge, max_ray_length
from .labeling import NO_REGION, Region, label_components
from .render import draw_bridge
from .router import edge_fallback

__all__ = [
    "BRIDGE_DIRECTIONS",
    "MAX_BRIDGES",
    "MAX_PIXELS",
    "NO_REGION",
    "SKIPPED",
    "BridgeCandidate",
    "BridgeContext",
    "Direction",
    "Region",
    "apply_auto_bridges",
    "apply_auto_bridges_rgba",
    "draw_bridge",
    "edge_fallback",
    "find_bridge",
    "label_components",
    "max_ray_length",
]

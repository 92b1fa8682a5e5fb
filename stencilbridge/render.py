import math
from typing import Dict, List, Tuple

import numpy as np

from .raster import Point, bresenham, round_half_up

# Cache for disk row extents to avoid recomputation
_disk_rows_cache: Dict[int, List[Tuple[int, int]]] = {}


def bridge_radius(bridge_width: int) -> int:
    return max(1, round_half_up(bridge_width / 2))


def get_disk_rows(radius: int) -> List[Tuple[int, int]]:
    """(dy, half_span) for every row of a filled disk: x runs over [-half_span, half_span]."""
    if radius in _disk_rows_cache:
        return _disk_rows_cache[radius]
    r2 = radius * radius
    rows = [(dy, math.isqrt(r2 - dy * dy)) for dy in range(-radius, radius + 1)]
    _disk_rows_cache[radius] = rows
    return rows


def paint_disk(mask: np.ndarray, cx: int, cy: int, radius: int) -> None:
    """Set a filled disk centred on (cx, cy), clipped to the canvas."""
    height, width = mask.shape
    for dy, span in get_disk_rows(radius):
        y = cy + dy
        if y < 0 or y >= height:
            continue
        x0 = max(0, cx - span)
        x1 = min(width - 1, cx + span)
        if x0 <= x1:
            mask[y, x0:x1 + 1] = True


def draw_bridge(mask: np.ndarray, start: Point, end: Point, bridge_width: int) -> None:
    """Draw a bridge by stamping a disk at every Bresenham step between start and end."""
    radius = bridge_radius(bridge_width)
    for x, y in bresenham(start, end):
        paint_disk(mask, x, y, radius)

from typing import Tuple

from .raster import Point, point_of


def edge_fallback(nearest_border_idx: int, width: int, height: int) -> Tuple[Point, Point]:
    """Straight segment from a region's pixel closest to the frame to the nearest canvas edge.

    Exact ties resolve left, right, top, bottom.
    """
    x, y = point_of(nearest_border_idx, width)
    left = x
    right = width - 1 - x
    top = y
    bottom = height - 1 - y
    shortest = min(left, right, top, bottom)

    if shortest == left:
        target = (0, y)
    elif shortest == right:
        target = (width - 1, y)
    elif shortest == top:
        target = (x, 0)
    else:
        target = (x, height - 1)
    return (x, y), target

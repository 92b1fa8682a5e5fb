import math
from typing import Iterator, Tuple

# (x, y) pixel position; flat index is y * width + x.
Point = Tuple[int, int]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def point_of(idx: int, width: int) -> Point:
    y, x = divmod(idx, width)
    return (x, y)


def bresenham(start: Point, end: Point) -> Iterator[Point]:
    """Yield every integer point on the line from start to end, both included."""
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    x, y = x0, y0
    while True:
        yield (x, y)
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy

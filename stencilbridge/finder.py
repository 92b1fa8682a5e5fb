from typing import NamedTuple, Optional, Sequence

import numpy as np

from .labeling import NO_REGION
from .raster import Point, point_of, round_half_up

RAY_SAMPLE_TARGET = 320
MIN_RAY_LENGTH = 24
RAY_LENGTH_FRACTION = 0.35


class Direction(NamedTuple):
    dx: int
    dy: int
    penalty: float


class BridgeCandidate(NamedTuple):
    score: float
    source: Point
    target: Point


# Diagonals render less predictably at a fixed width, so they carry a small penalty.
BRIDGE_DIRECTIONS = (
    Direction(1, 0, 0.0),
    Direction(-1, 0, 0.0),
    Direction(0, 1, 0.0),
    Direction(0, -1, 0.0),
    Direction(1, 1, 0.2),
    Direction(-1, -1, 0.2),
    Direction(-1, 1, 0.2),
    Direction(1, -1, 0.2),
)


def max_ray_length(width: int, height: int) -> int:
    return max(MIN_RAY_LENGTH, round_half_up(min(width, height) * RAY_LENGTH_FRACTION))


def find_bridge(
    region_id: int,
    boundary: Sequence[int],
    component_map: np.ndarray,
    width: int,
    height: int,
    max_len: int,
    directions: Sequence[Direction] = BRIDGE_DIRECTIONS,
) -> Optional[BridgeCandidate]:
    """Cast rays from sampled boundary pixels and return the cheapest hit on another region.

    A ray stops when it leaves the canvas, re-enters its own region, or reaches
    another region. Reaching another region only counts after at least one
    background pixel was crossed. Score is the distance travelled plus the
    direction penalty; the lowest score wins, earlier candidates win ties.
    """
    if not boundary:
        return None

    best: Optional[BridgeCandidate] = None
    step = max(1, len(boundary) // RAY_SAMPLE_TARGET)

    for start_idx in boundary[::step]:
        sx, sy = point_of(start_idx, width)

        for direction in directions:
            x, y = sx, sy
            crossed = 0
            for dist in range(1, max_len + 1):
                x += direction.dx
                y += direction.dy
                if x < 0 or x >= width or y < 0 or y >= height:
                    break

                hit = component_map[y * width + x]
                if hit == region_id:
                    break
                if hit != NO_REGION:
                    if crossed < 1:
                        break
                    score = dist + direction.penalty
                    if best is None or score < best.score:
                        best = BridgeCandidate(score, (sx, sy), (x, y))
                    break

                crossed += 1

    return best

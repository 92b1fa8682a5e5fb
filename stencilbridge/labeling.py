import logging
from typing import Iterator, List, NamedTuple

import numpy as np

NO_REGION = -1
MAX_BOUNDARY_SAMPLES = 1400
SEED_CHUNK = 1 << 16


class Region(NamedTuple):
    id: int
    area: int
    touch_border: bool
    boundary: List[int]
    nearest_border_idx: int


def _unlabelled_seeds(ink: np.ndarray, component_map: np.ndarray) -> Iterator[int]:
    """Yield unlabelled ink pixels in raster order, scanning SEED_CHUNK pixels at a time.

    The component map is re-checked before each yield, since filling a region
    labels pixels further along the current chunk.
    """
    for lo in range(0, ink.size, SEED_CHUNK):
        hi = min(lo + SEED_CHUNK, ink.size)
        pending = np.flatnonzero(ink[lo:hi] & (component_map[lo:hi] == NO_REGION))
        for offset in pending.tolist():
            if component_map[lo + offset] == NO_REGION:
                yield lo + offset


def label_components(
    ink: np.ndarray,
    width: int,
    height: int,
    component_map: np.ndarray,
    queue: np.ndarray,
) -> List[Region]:
    """Label 4-connected ink regions with a breadth-first flood fill.

    ink           : flat bool array of length width*height
    component_map : flat int array, overwritten with region ids (NO_REGION for background)
    queue         : flat int array used as the flood-fill worklist, same length

    Region ids follow raster-scan discovery order. Boundary samples are member
    pixels next to a background pixel or the canvas edge, in visit order,
    capped at MAX_BOUNDARY_SAMPLES.
    """
    component_map.fill(NO_REGION)
    regions: List[Region] = []

    for start in _unlabelled_seeds(ink, component_map):
        region_id = len(regions)
        queue[0] = start
        head, tail = 0, 1
        component_map[start] = region_id

        area = 0
        touch_border = False
        nearest_idx = start
        nearest_dist = width + height
        boundary: List[int] = []

        while head < tail:
            idx = int(queue[head])
            head += 1
            area += 1

            y, x = divmod(idx, width)
            if x == 0 or y == 0 or x == width - 1 or y == height - 1:
                touch_border = True

            # Strict less-than: the first pixel found at the minimum distance wins.
            edge_dist = min(x, y, width - 1 - x, height - 1 - y)
            if edge_dist < nearest_dist:
                nearest_dist = edge_dist
                nearest_idx = idx

            on_boundary = False
            for nxt, inside in (
                (idx - 1, x > 0),
                (idx + 1, x < width - 1),
                (idx - width, y > 0),
                (idx + width, y < height - 1),
            ):
                if not inside or not ink[nxt]:
                    on_boundary = True
                elif component_map[nxt] == NO_REGION:
                    component_map[nxt] = region_id
                    queue[tail] = nxt
                    tail += 1

            if on_boundary and len(boundary) < MAX_BOUNDARY_SAMPLES:
                boundary.append(idx)

        regions.append(Region(region_id, area, touch_border, boundary, nearest_idx))

    logging.debug("Labelled %d region(s) over %dx%d px", len(regions), width, height)
    return regions

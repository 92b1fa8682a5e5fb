import logging
from typing import List, Sequence

import numpy as np
from tqdm import tqdm

from .finder import BRIDGE_DIRECTIONS, Direction, find_bridge, max_ray_length
from .imaging import mask_from_rgba, mask_to_rgba
from .labeling import NO_REGION, Region, label_components
from .render import draw_bridge
from .router import edge_fallback

MAX_PIXELS = 14_000_000
MAX_BRIDGES = 400
SKIPPED = -1


class BridgeContext:
    """Buffers owned by a single bridging run.

    Holds a private copy of the mask plus the component map and the flood-fill
    worklist, so independent runs never share state.
    """

    def __init__(self, mask: np.ndarray):
        self.height, self.width = mask.shape
        pixel_count = self.width * self.height
        self.mask = np.array(mask, dtype=bool, copy=True)
        self.ink = self.mask.reshape(-1)
        self.component_map = np.full(pixel_count, NO_REGION, dtype=np.int32)
        self.queue = np.empty(pixel_count, dtype=np.int64)
        self.regions: List[Region] = []

    def label(self) -> List[Region]:
        self.regions = label_components(self.ink, self.width, self.height, self.component_map, self.queue)
        return self.regions

    def bridge_region(self, region: Region, bridge_width: int, max_len: int, directions: Sequence[Direction]) -> None:
        candidate = find_bridge(
            region.id,
            region.boundary,
            self.component_map,
            self.width,
            self.height,
            max_len,
            directions,
        )
        if candidate is not None:
            logging.debug(
                "Region %d (area=%d) bridged %s -> %s, score %.1f",
                region.id, region.area, candidate.source, candidate.target, candidate.score,
            )
            draw_bridge(self.mask, candidate.source, candidate.target, bridge_width)
            return

        start, end = edge_fallback(region.nearest_border_idx, self.width, self.height)
        logging.debug("Region %d (area=%d) has no ray hit, falling back to edge %s -> %s",
                      region.id, region.area, start, end)
        draw_bridge(self.mask, start, end, bridge_width)


def apply_auto_bridges(
    mask: np.ndarray,
    bridge_width: int = 14,
    min_area: int = 250,
    progress: bool = False,
    directions: Sequence[Direction] = BRIDGE_DIRECTIONS,
) -> int:
    """Attach floating ink regions to the rest of the stencil.

    - mask: 2-D bool array, True = ink (material that must stay attached); mutated in place
    - bridge_width: bridge thickness in pixels (caller clamps to >= 2)
    - min_area: floating regions smaller than this are left alone (caller clamps to >= 10)

    Returns the number of bridges drawn, or SKIPPED when the raster exceeds
    MAX_PIXELS (the mask is then left untouched).
    """
    height, width = mask.shape
    if width * height > MAX_PIXELS:
        logging.warning("Raster of %d px exceeds %d px, automatic bridges skipped", width * height, MAX_PIXELS)
        return SKIPPED

    ctx = BridgeContext(mask)
    regions = ctx.label()
    for region in regions:
        if not region.touch_border and region.area < min_area:
            logging.debug("Region %d (area=%d) below %d px, left as is", region.id, region.area, min_area)
    eligible = [r for r in regions if not r.touch_border and r.area >= min_area]
    floating = sum(1 for r in regions if not r.touch_border)
    logging.info("Found %d region(s), %d floating, %d eligible for bridges (min area=%d px)",
                 len(regions), floating, len(eligible), min_area)

    max_len = max_ray_length(width, height)
    bridge_count = 0
    with tqdm(eligible, desc="Building bridges", unit="region", disable=not progress) as bar:
        for region in bar:
            if bridge_count >= MAX_BRIDGES:
                logging.warning("Bridge cap of %d reached, %d region(s) left unconnected",
                                MAX_BRIDGES, len(eligible) - bridge_count)
                break
            ctx.bridge_region(region, bridge_width, max_len, directions)
            bridge_count += 1

    mask[...] = ctx.mask
    logging.info("Added %d bridge(s)", bridge_count)
    return bridge_count


def apply_auto_bridges_rgba(
    rgba: np.ndarray,
    bridge_width: int = 14,
    min_area: int = 250,
    ink_value: int = 255,
    progress: bool = False,
) -> int:
    """Run apply_auto_bridges on an RGBA buffer of shape (height, width, 4), in place.

    Pixels whose first channel equals ink_value are ink. On success the whole
    buffer is rewritten as pure ink/background; when skipped it is untouched.
    """
    mask = mask_from_rgba(rgba, ink_value=ink_value)
    count = apply_auto_bridges(mask, bridge_width=bridge_width, min_area=min_area, progress=progress)
    if count != SKIPPED:
        rgba[...] = mask_to_rgba(mask, ink_value=ink_value)
    return count
